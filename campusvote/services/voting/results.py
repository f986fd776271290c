def tally_election(election, tally_store):
    candidates = [candidate for candidate in election.candidates if candidate.is_approved]
    counts = tally_store.counts_for_election(election.id)
    candidate_counts = {candidate.id: counts.get(candidate.id, 0) for candidate in candidates}

    total_votes = sum(candidate_counts.values())
    max_votes = max(candidate_counts.values(), default=0)

    winners = []
    if max_votes > 0:
        winners = [
            candidate
            for candidate in candidates
            if candidate_counts[candidate.id] == max_votes
        ]

    candidate_results = []
    for candidate in candidates:
        count = candidate_counts[candidate.id]
        percent = (count / total_votes * 100) if total_votes > 0 else 0
        candidate_results.append(
            {"candidate": candidate, "count": count, "percent": percent}
        )

    candidate_results.sort(
        key=lambda row: (
            -row["count"],
            row["candidate"].name.lower(),
            row["candidate"].id,
        )
    )

    return {
        "total_votes": total_votes,
        "candidate_results": candidate_results,
        "winner": winners[0] if len(winners) == 1 else None,
        "winners": winners,
        "is_tie": len(winners) > 1,
        "top_vote_count": max_votes,
    }

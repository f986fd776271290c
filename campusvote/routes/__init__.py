from campusvote.routes.voting import register_voting_routes


def register_routes(app):
    register_voting_routes(app)

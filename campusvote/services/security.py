from werkzeug.security import check_password_hash, generate_password_hash


def generate_voter_id(roll_number):
    return f"v{roll_number.strip()}"


def hash_password(password):
    return generate_password_hash(password, method="pbkdf2:sha256")


def verify_password(password_hash, password):
    if not password_hash or password is None:
        return False
    return check_password_hash(password_hash, password)

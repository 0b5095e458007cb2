from werkzeug.security import generate_password_hash, check_password_hash


def hash_password(password: str) -> str:
    # werkzeug salts per call and encodes method and salt into the result
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)

"""
Password service - hashes and verifies user credentials
"""
from werkzeug.security import generate_password_hash, check_password_hash


class PasswordService:
    # Thin wrapper so the hashing method can be swapped in one place

    def __init__(self, method: str = "scrypt"):
        self.method = method

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self.method)

    def verify(self, password_hash: str, plaintext: str) -> bool:
        return check_password_hash(password_hash, plaintext)

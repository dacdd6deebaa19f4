"""PDF decryption package."""

from src.unlock.decryptor import Decryptor, QpdfDecryptor, get_decryptor

__all__ = ["Decryptor", "QpdfDecryptor", "get_decryptor"]

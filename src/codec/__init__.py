"""Payload codec package."""

from src.codec.payload import decode_payload, encode_payload

__all__ = ["decode_payload", "encode_payload"]

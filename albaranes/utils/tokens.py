import secrets


def generar_token(num_bytes: int = 20) -> str:
    """Token opaco aleatorio en hexadecimal (``2 * num_bytes`` caracteres)."""
    return secrets.token_hex(num_bytes)

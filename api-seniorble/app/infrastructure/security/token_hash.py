import hashlib


def hash_token(token: str) -> str:
    # chave de busca determinística; o token em si já é assinado
    return hashlib.sha256(token.encode("utf-8")).hexdigest()

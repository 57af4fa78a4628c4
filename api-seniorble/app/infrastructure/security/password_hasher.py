import bcrypt

from app.core.exceptions import ConfigError, HashFormatError, ValidationError


class PasswordHasher:
    MIN_ROUNDS = 10
    MAX_ROUNDS = 14
    DEFAULT_ROUNDS = 10
    # limite do próprio bcrypt
    MAX_PASSWORD_BYTES = 72

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        if not (self.MIN_ROUNDS <= int(rounds) <= self.MAX_ROUNDS):
            raise ConfigError(
                f"bcrypt_rounds={rounds} fora do intervalo aceito ({self.MIN_ROUNDS}-{self.MAX_ROUNDS})."
            )
        self._rounds = int(rounds)
        # usado no login quando o email não existe, para igualar o tempo de resposta
        self._dummy_hash = self.hash_password("seniorble-dummy-password")

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash_password(self, password: str) -> str:
        if not password:
            raise ValidationError("비밀번호를 입력해주세요.")

        raw = password.encode("utf-8")
        if len(raw) > self.MAX_PASSWORD_BYTES:
            raise ValidationError("비밀번호가 너무 깁니다.")

        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        if not password_hash or not password_hash.startswith("$2"):
            raise HashFormatError()

        raw = (password or "").encode("utf-8")
        if not raw or len(raw) > self.MAX_PASSWORD_BYTES:
            return False

        try:
            return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
        except ValueError as e:
            raise HashFormatError() from e

    def dummy_verify(self, password: str) -> bool:
        self.verify_password(password or "x", self._dummy_hash)
        return False

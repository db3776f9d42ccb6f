import uuid
from contextlib import contextmanager

import redis

from app.domain.errors import ConflictError, InternalError
from app.utils.retry import redis_retry, lock_wait_retry
from app.utils.settings import REDIS_URL, LOCK_TTL_SECONDS, LOCK_WAIT_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje atomowo przez lua, skrypt dziala jako jedna nieprzerywalna operacja
#nie mozna wcisnac sie miedzy GET a DEL, wiec get + porownanie + del naraz
#token losowy per wywolanie, wiec nikt nie zwolni cudzego locka


class LockService:
    """
    -lock per uzytkownik (email): zakladanie koszyka i checkout
    -zwalnianie locka tylko przez wlasciciela tokena
    -ttl, zeby padniety proces nie zablokowal usera na zawsze
    """

    def __init__(
        self,
        url: str | None = None,
        client: redis.Redis | None = None,
        ttl: int = LOCK_TTL_SECONDS,
        wait_seconds: float = LOCK_WAIT_SECONDS,
    ):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl
        self.wait_seconds = wait_seconds

    @staticmethod
    def _key(email: str) -> str:
        return f"user:{email.lower()}:lock"

    @redis_retry()
    def acquire_user_lock(self, email: str, token: str, ttl: int) -> bool:
        key = self._key(email)
        logger.debug(f"Acquire lock {key}")
        #SET user:a@b.c:lock "<token>" NX EX 30
        return bool(self.redis.set(name=key, value=token, nx=True, ex=ttl))

    @redis_retry()
    def release_user_lock(self, email: str, token: str) -> bool:
        key = self._key(email)
        logger.debug(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def user_lock(self, email: str):
        token = uuid.uuid4().hex
        try:
            acquired = lock_wait_retry(self.wait_seconds)(self.acquire_user_lock)(email, token, self.ttl)
        except redis.RedisError as e:
            logger.error(f"Redis unavailable while locking user {email}: {e}")
            raise InternalError("Lock service unavailable") from e

        if not acquired:
            logger.warning(f"Lock for user {email} still busy after {self.wait_seconds}s")
            raise ConflictError("Another operation on this cart is in progress, try again")

        try:
            yield
        finally:
            self._release_quietly(email, token)

    def _release_quietly(self, email: str, token: str) -> None:
        #blad przy zwalnianiu nie moze nadpisac wyniku operacji, klucz i tak wygasnie po ttl
        try:
            released = self.release_user_lock(email, token)
        except redis.RedisError as e:
            logger.warning(f"Could not release lock for user {email}, left to expire after {self.ttl}s: {e}")
            return

        if not released:
            logger.warning(f"Lock for user {email} expired before release")

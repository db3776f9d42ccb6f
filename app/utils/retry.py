# app/utils/retry.py
import redis
import requests
from tenacity import (
    retry,
    retry_if_exception,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
    wait_fixed,
)

LOCK_POLL_SECONDS = 0.05


def _is_transient_http_error(exc: BaseException) -> bool:
    #4xx od katalogu to odpowiedz, nie awaria, nie ponawiamy
    if isinstance(exc, requests.HTTPError):
        return exc.response is not None and exc.response.status_code >= 500
    return isinstance(exc, requests.RequestException)


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception(_is_transient_http_error),
    )


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def lock_wait_retry(wait_seconds: float):
    """
    Ponawia zakladanie locka az zwroci True albo minie wait_seconds.
    Po czasie zwraca False zamiast rzucac RetryError.
    """
    return retry(
        stop=stop_after_delay(wait_seconds),
        wait=wait_fixed(LOCK_POLL_SECONDS),
        retry=retry_if_result(lambda acquired: not acquired),
        retry_error_callback=lambda retry_state: False,
    )

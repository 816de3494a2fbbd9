"""
Limites de tentativas para os formularios de cadastro e login.

Duas chaves independentes: o IP do cliente (X-Forwarded-For so vale quando a
conexao vem de um proxy listado em TRUSTED_PROXIES) e a conta alvo, para que
trocar de IP nao libere novas tentativas de senha contra o mesmo e-mail.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Dict, Tuple

from fastapi import HTTPException, Request

from .config import get_settings

logger = logging.getLogger(__name__)

TOO_MANY_ATTEMPTS = "Muitas tentativas. Aguarde alguns instantes e tente novamente."
PRUNE_INTERVAL_SECONDS = 60


class _RateLimiter:
    """Fixed-window counter per key, kept in process memory."""

    def __init__(self) -> None:
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()
        self._next_prune = 0.0

    def _prune(self, now: float) -> None:
        expired = [key for key, (_, reset) in self._hits.items() if reset < now]
        for key in expired:
            del self._hits[key]
        self._next_prune = now + PRUNE_INTERVAL_SECONDS

    def check(self, key: str, limit: int, window_seconds: int) -> None:
        now = time.time()
        with self._lock:
            if now >= self._next_prune:
                self._prune(now)
            count, reset = self._hits.get(key, (0, now + window_seconds))
            if now > reset:
                count = 0
                reset = now + window_seconds
            count += 1
            self._hits[key] = (count, reset)
        if count > limit:
            logger.warning("rate limit exceeded for %s", key)
            raise HTTPException(429, TOO_MANY_ATTEMPTS)

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._next_prune = 0.0


_limiter = _RateLimiter()


def client_ip(request: Request) -> str:
    peer = request.client.host if request.client and request.client.host else "unknown"
    if peer in get_settings().trusted_proxies:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return peer


def rate_limit_ip(request: Request, scope: str, *, limit: int, window_seconds: int) -> None:
    _limiter.check(f"{scope}:ip:{client_ip(request)}", limit, window_seconds)


def rate_limit_account(scope: str, identity: str, *, limit: int, window_seconds: int) -> None:
    """Limite por conta alvo (e-mail normalizado); identidade vazia nao conta."""
    identity = (identity or "").strip().lower()
    if identity:
        _limiter.check(f"{scope}:account:{identity}", limit, window_seconds)


def reset_limits() -> None:
    _limiter.reset()

"""
Seat secrets.

A seat is claimed by presenting the secret handed out when the game was created. Only the SHA-256
hash of a secret is ever stored, and a successful claim replaces the hash by the claiming actor,
so the same secret can never be verified again.
"""

import base64
import hashlib
import hmac
import secrets
from dataclasses import dataclass
from typing import Callable

from src.core.exceptions import InvalidTokenError, SeatTakenError
from src.core.shared_types import Actor

RandomSource = Callable[[int], bytes]

DEFAULT_TOKEN_BYTES = 32


@dataclass(frozen=True)
class UnclaimedSeat:
    secret_hash: bytes


@dataclass(frozen=True)
class ClaimedSeat:
    actor: Actor


Seat = UnclaimedSeat | ClaimedSeat


class TokenAuthority:
    """Generates seat secrets, and verifies/burns them on claim."""

    def __init__(
        self,
        random_source: RandomSource = secrets.token_bytes,
        token_bytes: int = DEFAULT_TOKEN_BYTES,
    ) -> None:
        self.random_source = random_source
        self.token_bytes = token_bytes

    def generate_secret(self) -> str:
        """URL-safe base64 text of fresh random bytes, without '=' padding."""
        raw = self.random_source(self.token_bytes)
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

    @staticmethod
    def hash_secret(secret: str) -> bytes:
        return hashlib.sha256(secret.encode("utf-8")).digest()

    def new_seat(self) -> tuple[str, UnclaimedSeat]:
        """Plaintext secret (to hand out once) and the seat that only remembers its hash."""
        secret = self.generate_secret()
        return secret, UnclaimedSeat(self.hash_secret(secret))

    def matches(self, seat: Seat, candidate_secret: str) -> bool:
        """Only an unclaimed seat can match a secret."""
        if not isinstance(seat, UnclaimedSeat):
            return False
        return hmac.compare_digest(seat.secret_hash, self.hash_secret(candidate_secret))

    def claim(self, seat: Seat, candidate_secret: str, actor: Actor) -> ClaimedSeat:
        """
        Burn the secret and hand the seat to the actor.
        ----

        The returned seat keeps no hash, so there is nothing left to verify a second time.
        """
        if isinstance(seat, ClaimedSeat):
            raise SeatTakenError("Seat already taken.")
        if not self.matches(seat, candidate_secret):
            raise InvalidTokenError("Invalid or already-used token.")
        return ClaimedSeat(actor)

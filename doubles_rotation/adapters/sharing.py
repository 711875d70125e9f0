"""
Configuration sharing: the (players, courts, rounds, seed, options) tuple as a
compact URL-safe token, and back. Tokens are compact JSON, zlib-compressed,
base64url without padding.
"""
from __future__ import annotations

import base64
import binascii
import json
import zlib
from dataclasses import dataclass, field
from typing import Any

from ..engine.schemas import ScheduleOptions


class ShareTokenError(ValueError):
    """Token is not valid base64url, zlib or JSON, or lacks required fields."""


@dataclass
class ShareConfig:
    players: list[str]
    courts: int = 1
    rounds: int = 1
    seed: str = ""
    options: ScheduleOptions = field(default_factory=ScheduleOptions)
    auto: bool = False  # receiver should build the schedule on open

    def to_dict(self) -> dict[str, Any]:
        # Short keys keep the token small
        return {
            "players": list(self.players),
            "courts": self.courts,
            "rounds": self.rounds,
            "seed": self.seed,
            "wT": self.options.weight_team,
            "wO": self.options.weight_opponent,
            "wP": self.options.weight_play,
            "beamWidth": self.options.beam_width,
            "partnerK": self.options.partner_k,
            "square": self.options.square_repeats,
            "avoidB2B": self.options.avoid_back_to_back,
            "auto": 1 if self.auto else 0,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ShareConfig:
        defaults = ScheduleOptions()
        players = d.get("players")
        if not isinstance(players, list) or not all(isinstance(p, str) for p in players):
            raise ShareTokenError("Share token has no player list")
        square = _flag(d, "square", defaults.square_repeats)
        avoid_b2b = _flag(d, "avoidB2B", defaults.avoid_back_to_back)
        auto = _flag(d, "auto", False)
        try:
            options = ScheduleOptions(
                weight_team=float(d.get("wT", defaults.weight_team)),
                weight_opponent=float(d.get("wO", defaults.weight_opponent)),
                weight_play=float(d.get("wP", defaults.weight_play)),
                beam_width=int(d.get("beamWidth", defaults.beam_width)),
                partner_k=int(d.get("partnerK", defaults.partner_k)),
                square_repeats=square,
                avoid_back_to_back=avoid_b2b,
            )
            return cls(
                players=list(players),
                courts=int(d.get("courts", 1)),
                rounds=int(d.get("rounds", 1)),
                seed=str(d.get("seed", "")),
                options=options,
                auto=auto,
            )
        except (TypeError, ValueError) as e:
            raise ShareTokenError(f"Share token has a malformed field: {e}") from e


def _flag(d: dict[str, Any], key: str, default: bool) -> bool:
    value = d.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ShareTokenError(f"Share token field {key!r} must be true/false or 0/1, got {value!r}")


def encode_share_token(config: ShareConfig) -> str:
    raw = json.dumps(config.to_dict(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    packed = zlib.compress(raw, 9)
    return base64.urlsafe_b64encode(packed).decode("ascii").rstrip("=")


def decode_share_token(token: str) -> ShareConfig:
    token = (token or "").strip()
    if not token:
        raise ShareTokenError("Empty share token")
    try:
        packed = base64.urlsafe_b64decode(token + "=" * (-len(token) % 4))
        data = json.loads(zlib.decompress(packed).decode("utf-8"))
    except (binascii.Error, zlib.error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ShareTokenError(f"Invalid share token: {e}") from e
    if not isinstance(data, dict):
        raise ShareTokenError("Share token does not hold a configuration object")
    return ShareConfig.from_dict(data)

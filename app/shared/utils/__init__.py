"""Shared utilities: datetime helpers."""

from app.shared.utils.datetime import ensure_utc, epoch_millis, utc_now

__all__ = [
    "ensure_utc",
    "epoch_millis",
    "utc_now",
]

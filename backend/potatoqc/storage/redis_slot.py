"""Slot adapter backed by a single Redis string key."""

import redis


class RedisSlot:
    def __init__(self, client: redis.Redis, key: str):
        self.client = client
        self.key = key

    @classmethod
    def from_url(cls, redis_url: str, key: str) -> "RedisSlot":
        # Raw bytes in and out; the codec handles decoding
        return cls(redis.Redis.from_url(redis_url, decode_responses=False), key)

    def load(self) -> bytes | None:
        return self.client.get(self.key)

    def save(self, payload: bytes) -> None:
        self.client.set(self.key, payload)

    def close(self) -> None:
        self.client.close()

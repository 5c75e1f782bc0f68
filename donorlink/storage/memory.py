"""In-process text store used for tests and local development."""


class InMemoryStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.write_count = 0

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.write_count += 1

    async def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None

    async def ping(self) -> bool:
        return True

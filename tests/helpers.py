import ssl


class StubSslContextFactory:
    """Returns a default client context and records the directories asked for."""

    def __init__(self) -> None:
        self.requested: list[str] = []
        self.context = ssl.create_default_context()

    def for_directory(self, path: str) -> ssl.SSLContext:
        self.requested.append(path)
        return self.context

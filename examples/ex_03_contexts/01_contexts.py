"""Contexts: bind the same key differently per consumer.

Autowiring passes the consuming class as the context of its dependencies, so
a binding made under ``context=AuditController`` only reaches that class.
"""

from __future__ import annotations

from ctxwire import Container


class Logger:
    name = "base"


class StdoutLogger(Logger):
    name = "stdout"


class FileLogger(Logger):
    name = "file"


class UserController:
    def __init__(self, logger: Logger) -> None:
        self.logger = logger


class AuditController:
    def __init__(self, logger: Logger) -> None:
        self.logger = logger


def main() -> None:
    container = Container()
    container.bind_singleton(Logger, lambda c: StdoutLogger())
    container.bind_singleton(Logger, lambda c: FileLogger(), AuditController)

    print(f"users={container.get(UserController).logger.name}")  # => users=stdout
    print(f"audit={container.get(AuditController).logger.name}")  # => audit=file

    container.bind_singleton("region", "eu")
    container.bind_singleton("region", "us", "billing")
    print(f"region={container.get('region')}")  # => region=eu
    print(f"billing_region={container.get('region', context='billing')}")  # => billing_region=us


if __name__ == "__main__":
    main()

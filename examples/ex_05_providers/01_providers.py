"""Providers: group bindings and set them up in two phases.

``register`` runs immediately and binds keys. ``boot`` runs once every
provider is registered, so it can use bindings from other providers.
"""

from __future__ import annotations

from ctxwire import Container, ContainerProvider


class Config:
    def __init__(self, env: str) -> None:
        self.env = env


class Mailer:
    def __init__(self, config: Config) -> None:
        self.config = config


class ConfigProvider(ContainerProvider):
    def register(self, container: Container) -> None:
        container.bind_instance(Config, Config("production"))


class MailerProvider(ContainerProvider):
    def register(self, container: Container) -> None:
        container.bind_singleton(Mailer, lambda c: Mailer(c.get(Config)))

    def boot(self, container: Container) -> None:
        print(f"boot_env={container.get(Mailer).config.env}")  # => boot_env=production


def main() -> None:
    container = Container()
    container.register(MailerProvider())
    container.register(ConfigProvider())
    container.boot()


if __name__ == "__main__":
    main()

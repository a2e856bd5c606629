"""Domain initialization and configuration.

Configuration lives in ``domain.toml`` next to this module; ``PROTEAN_ENV``
selects the overlay (``[test]``, ``[production]``) applied on top of it.
Application settings sit under ``[custom]`` and are read by ``shared.config``.
"""

import os

from protean.domain import Domain
from sqlalchemy import create_engine

# Domain Composition Root
yapee = Domain(name="yapee")

_initialized = False


def init_domain() -> Domain:
    """Register the Protean-persisted aggregates and initialize the domain once."""
    global _initialized
    if _initialized:
        return yapee

    import settings_store.setting.repository  # noqa: F401
    import settings_store.setting.setting  # noqa: F401

    database = yapee.config["databases"]["default"]
    if os.getenv("DATABASE_URL") and database["provider"] != "memory":
        database["database_uri"] = os.environ["DATABASE_URL"]

    yapee.init(traverse=False)
    _initialized = True
    return yapee


def setup_domain_db(domain: Domain = yapee) -> None:
    """Create the tables backing the domain's aggregates on SQL providers."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])

                # Accessing ``_dao`` registers each aggregate's model with the provider's metadata
                for _, aggregate_record in domain.registry.aggregates.items():
                    if aggregate_record.cls.meta_.provider == provider.name:
                        domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

                provider._metadata.create_all(engine)


def drop_domain_db(domain: Domain = yapee) -> None:
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)


def reset_domain_data(domain: Domain = yapee) -> None:
    """Remove every persisted aggregate, keeping the schema."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()

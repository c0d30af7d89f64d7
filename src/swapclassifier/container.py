from dependency_injector import containers, providers

from swapclassifier.config import Settings
from swapclassifier.parser.pipeline import SwapClassifier
from swapclassifier.parser.registry import build_default_registry


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    registry = providers.Singleton(build_default_registry)

    price_lookup = providers.Object(None)

    classifier = providers.Singleton(
        SwapClassifier,
        settings=settings,
        registry=registry,
        price_lookup=price_lookup,
    )

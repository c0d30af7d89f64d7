from decimal import Decimal

from swapclassifier.config import Settings
from swapclassifier.container import Container
from swapclassifier.parser.pipeline import SwapClassifier

from builders import buy_tx


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.rent_noise_threshold_sol == Decimal("0.01")
        assert settings.minimum_usd_value == Decimal("2.0")
        assert settings.suppress_core_to_core is True
        assert settings.batch_max_workers == 8

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SWAPCLASSIFIER_MINIMUM_USD_VALUE", "10")
        monkeypatch.setenv("SWAPCLASSIFIER_SUPPRESS_CORE_TO_CORE", "false")
        settings = Settings(_env_file=None)
        assert settings.minimum_usd_value == Decimal(10)
        assert settings.suppress_core_to_core is False


class TestContainer:
    def test_classifier_is_singleton(self):
        container = Container()
        assert container.classifier() is container.classifier()
        assert isinstance(container.classifier(), SwapClassifier)

    def test_overridden_settings_flow_into_classifier(self):
        container = Container()
        container.settings.override(Settings(_env_file=None, suppress_core_to_core=False))
        container.price_lookup.override(lambda mint, timestamp: Decimal(150))

        classifier = container.classifier()
        result = classifier.classify(buy_tx(sol_spent=1_000_000))  # 0.001 SOL = $0.15
        assert not result.success
        assert result.erase.reason == "below_minimum_value_threshold"

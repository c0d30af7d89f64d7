import pytest

from swapclassifier.domain.enums import Provider
from swapclassifier.parser.adapters.base import AdapterError, NormalizedAdapter
from swapclassifier.parser.adapters.helius import HeliusAdapter
from swapclassifier.parser.adapters.rpc import SolanaRpcAdapter
from swapclassifier.parser.adapters.shyft import ShyftAdapter
from swapclassifier.parser.registry import AdapterRegistry, build_default_registry

from builders import SIGNATURE, SWAPPER, tx_dict


class TestAdapterRegistry:
    def test_default_registry_has_all_providers(self):
        registry = build_default_registry()
        assert registry.providers() == ["normalized", "shyft", "helius", "rpc"]

    def test_get_by_name_or_enum(self):
        registry = build_default_registry()
        assert isinstance(registry.get("helius"), HeliusAdapter)
        assert isinstance(registry.get("SHYFT"), ShyftAdapter)
        assert isinstance(registry.get(Provider.RPC), SolanaRpcAdapter)

    def test_unknown_provider(self):
        with pytest.raises(AdapterError, match="Unknown provider: solscan"):
            build_default_registry().get("solscan")

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"balanceChanges": []}, NormalizedAdapter),
            ({"balance_changes": []}, NormalizedAdapter),
            ({"token_balance_changes": []}, ShyftAdapter),
            ({"fee_payer": SWAPPER, "actions": []}, ShyftAdapter),
            ({"tokenTransfers": []}, HeliusAdapter),
            ({"accountData": []}, HeliusAdapter),
            ({"meta": {}, "transaction": {}}, SolanaRpcAdapter),
            ({"result": {"meta": {}, "transaction": {}}}, SolanaRpcAdapter),
        ],
    )
    def test_detect(self, payload, expected):
        assert isinstance(build_default_registry().detect(payload), expected)

    def test_detect_unknown_shape(self):
        assert build_default_registry().detect({"signature": SIGNATURE}) is None

    def test_adapt_auto_detects(self):
        tx = build_default_registry().adapt(tx_dict())
        assert tx.signature == SIGNATURE
        assert tx.provider == Provider.NORMALIZED

    def test_adapt_rejects_non_objects(self):
        with pytest.raises(AdapterError, match="expected an object"):
            build_default_registry().adapt(["not", "a", "dict"])

    def test_adapt_unrecognized(self):
        with pytest.raises(AdapterError, match="Unrecognized transaction payload shape"):
            build_default_registry().adapt({"hello": "world"})

    def test_register_replaces_provider(self):
        class StrictHelius(HeliusAdapter):
            def can_adapt(self, payload):
                return "strict" in payload

        registry = AdapterRegistry()
        registry.register(HeliusAdapter())
        registry.register(StrictHelius())

        assert registry.providers() == ["helius"]
        assert isinstance(registry.get("helius"), StrictHelius)
        assert registry.detect({"tokenTransfers": []}) is None


class TestNormalizedAdapter:
    def test_validation_error_surfaces(self):
        with pytest.raises(AdapterError, match="Missing required field: fee_payer"):
            NormalizedAdapter().adapt(tx_dict(feePayer=""))

    def test_type_error_surfaces(self):
        with pytest.raises(AdapterError, match="Invalid field"):
            NormalizedAdapter().adapt(tx_dict(status=123))

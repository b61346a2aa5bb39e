"""Tests for gateway value types and configuration parsing."""

import dataclasses

import pytest

from bucketgate.storage.contracts import (
    DEFAULT_LINK_EXPIRATION_SECONDS,
    NO_EXPIRATION,
    ConfigurationError,
    GatewayConfig,
    ObjectMetadata,
    StorageError,
    UploadForm,
    parse_expiration,
)


class TestGatewayConfig:
    """Tests for GatewayConfig validation and defaults."""

    def test_default_expiration_applied(self):
        config = GatewayConfig(bucket="b", region="r", access_key="ak", secret_key="sk")
        assert config.link_expiration_seconds == DEFAULT_LINK_EXPIRATION_SECONDS == 14400

    def test_zero_expiration_means_default(self):
        config = GatewayConfig(
            bucket="b", region="r", access_key="ak", secret_key="sk", link_expiration_seconds=0
        )
        assert config.link_expiration_seconds == DEFAULT_LINK_EXPIRATION_SECONDS

    def test_no_expiration_is_kept(self):
        config = GatewayConfig(
            bucket="b", region="r", access_key="ak", secret_key="sk",
            link_expiration_seconds=NO_EXPIRATION,
        )
        assert config.link_expiration_seconds is NO_EXPIRATION

    def test_config_is_frozen(self):
        config = GatewayConfig(bucket="b", region="r", access_key="ak", secret_key="sk")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.bucket = "other"

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"bucket": ""}, "bucket is required"),
            ({"region": ""}, "region is required"),
            ({"access_key": ""}, "access key"),
            ({"secret_key": ""}, "secret key"),
            ({"link_expiration_seconds": -1}, "positive"),
            ({"link_expiration_seconds": 1.5}, "whole seconds"),
            ({"link_expiration_seconds": float("inf")}, "whole seconds"),
        ],
    )
    def test_invalid_values_raise(self, overrides, message):
        values = {"bucket": "b", "region": "r", "access_key": "ak", "secret_key": "sk"}
        values.update(overrides)

        with pytest.raises(ConfigurationError, match=message) as excinfo:
            GatewayConfig(**values)

        assert excinfo.value.op == "configure"

    def test_repr_hides_secret(self):
        config = GatewayConfig(bucket="b", region="r", access_key="ak", secret_key="topsecret")
        assert "topsecret" not in repr(config)


class TestErrorHierarchy:
    def test_configuration_error_is_storage_and_value_error(self):
        assert issubclass(ConfigurationError, StorageError)
        assert issubclass(ConfigurationError, ValueError)

    def test_storage_error_context(self):
        err = StorageError(op="delete", bucket="b", key="k", message="nope")
        assert str(err) == "delete failed for bucket=b key=k: nope"


class TestParseExpiration:
    @pytest.mark.parametrize("value", [None, "", "   ", "0", 0])
    def test_default(self, value):
        assert parse_expiration(value) is None

    @pytest.mark.parametrize("value", ["never", "NEVER", "none", "inf", "Infinity"])
    def test_never_words(self, value):
        assert parse_expiration(value) is NO_EXPIRATION

    def test_seconds(self):
        assert parse_expiration("600") == 600
        assert parse_expiration(" 90 ") == 90
        assert parse_expiration(3600) == 3600

    @pytest.mark.parametrize("value", ["soon", "-5", "1.5", "10m"])
    def test_invalid(self, value):
        with pytest.raises(ConfigurationError):
            parse_expiration(value)


class TestValueTypes:
    def test_object_metadata_defaults(self):
        metadata = ObjectMetadata()
        assert metadata.size == 0
        assert metadata.checksum is None

    def test_upload_form_as_dict_keeps_order(self):
        form = UploadForm(url="https://b.s3.r.amazonaws.com/", fields=(("key", "k"), ("policy", "p")))
        assert list(form.as_dict().items()) == [("key", "k"), ("policy", "p")]

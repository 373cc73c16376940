"""Tests for the shared error hierarchy."""

from __future__ import annotations

import pytest

from doors94.errors import (
    CollisionError,
    ConfigError,
    Doors94Error,
    EmptyResponseError,
    ImmutableError,
    InvalidRequestError,
    ManifestValidationError,
    NotFoundError,
    QuotaError,
    StorageError,
    StorageQuotaExceededError,
    UpstreamError,
)


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error_cls",
        [
            CollisionError,
            ConfigError,
            EmptyResponseError,
            ImmutableError,
            InvalidRequestError,
            ManifestValidationError,
            NotFoundError,
            QuotaError,
            StorageError,
            UpstreamError,
        ],
    )
    def test_all_are_doors94_errors(self, error_cls: type[Exception]) -> None:
        assert issubclass(error_cls, Doors94Error)

    def test_quota_exceeded_is_storage_error(self) -> None:
        assert issubclass(StorageQuotaExceededError, StorageError)


class TestMessages:
    def test_manifest_validation_error(self) -> None:
        err = ManifestValidationError(["Agent name is required", "Tone is required"])
        assert str(err) == "Invalid agent manifest: Agent name is required, Tone is required"
        assert err.errors == ["Agent name is required", "Tone is required"]

    def test_collision(self) -> None:
        err = CollisionError("tutorial")
        assert '"tutorial"' in str(err)
        assert err.agent_id == "tutorial"

    def test_quota(self) -> None:
        err = QuotaError(50)
        assert "Maximum of 50 user agents allowed" in str(err)
        assert err.limit == 50

    def test_not_found(self) -> None:
        assert str(NotFoundError("agent", "ghost")) == 'Agent with id "ghost" not found'

    def test_storage_error(self) -> None:
        assert str(StorageError()) == "Storage error"
        assert str(StorageError("disk full")) == "Storage error: disk full"

    def test_storage_quota(self) -> None:
        err = StorageQuotaExceededError(1024)
        assert err.quota_bytes == 1024
        assert "1024 bytes" in str(err)

    def test_upstream(self) -> None:
        err = UpstreamError("Upstream API error: boom", status=429, code="rate_limit")
        assert (err.status, err.code) == (429, "rate_limit")
        assert str(err) == "Upstream API error: boom"

"""Tests for policy routing."""

import pytest

from easy_cache import Backend, CachePolicy, PolicyRouter


@pytest.mark.parametrize(
    ("policy", "backend"),
    [
        (CachePolicy.APP_SESSION, Backend.MEMORY),
        (CachePolicy.APP_INSTALL, Backend.PERSISTENT),
        (CachePolicy.SECURE, Backend.SECURE),
        ("secure", Backend.SECURE),
    ],
)
def test_backend_for_policy(policy, backend) -> None:
    assert PolicyRouter().backend_for(policy) is backend


def test_probe_order_is_fixed() -> None:
    router = PolicyRouter()

    assert router.probe_order() == (Backend.MEMORY, Backend.PERSISTENT, Backend.SECURE)
    assert router.removal_targets() == router.probe_order()


def test_purge_targets() -> None:
    router = PolicyRouter()

    assert router.purge_targets() == [Backend.MEMORY, Backend.PERSISTENT, Backend.SECURE]
    assert router.purge_targets(include_app_install=False, include_secure_storage=False) == [
        Backend.MEMORY
    ]
    assert router.purge_targets(False, False, False) == []


def test_unknown_policy_rejected() -> None:
    with pytest.raises(ValueError):
        PolicyRouter().backend_for("forever")

"""Tests for unique user resolution."""

from dataclasses import replace

from compost_logbook.domain.logs import Activity
from compost_logbook.services.identity import IdentityService
from tests.conftest import make_log


def test_build_mapping_keeps_first_email_per_device(
    identity_service: IdentityService,
) -> None:
    logs = [
        make_log(1, 1, Activity.INPUT, 1.0, "d1", email="First@Example.com "),
        make_log(2, 1, Activity.INPUT, 1.0, "d1", email="second@example.com"),
        make_log(3, 1, Activity.INPUT, 1.0, "d2", email="first@example.com"),
    ]

    mapping = identity_service.build_mapping(logs)

    assert mapping.device_to_email == {
        "d1": "first@example.com",
        "d2": "first@example.com",
    }
    assert mapping.email_to_devices["first@example.com"] == frozenset({"d1", "d2"})
    assert mapping.email_to_devices["second@example.com"] == frozenset({"d1"})


def test_build_mapping_ignores_blank_devices_and_bad_ciphertext(
    identity_service: IdentityService,
) -> None:
    blank_device = make_log(1, 1, Activity.INPUT, 1.0, "  ", email="a@x.com")
    garbled = make_log(2, 1, Activity.INPUT, 1.0, "d2", email="b@x.com")
    garbled = replace(garbled, email_ciphertext="junk")

    mapping = identity_service.build_mapping([blank_device, garbled])

    assert mapping.device_to_email == {}
    assert mapping.email_to_devices == {}


def test_anonymous_device_counts_once(identity_service: IdentityService) -> None:
    logs = [
        make_log(1, 1, Activity.INPUT, 1.0, "d1"),
        make_log(2, 2, Activity.OUTPUT, 2.0, "d1"),
    ]

    assert identity_service.count_unique_users(logs, {}) == 1


def test_linked_device_without_email_counts_under_email(
    identity_service: IdentityService,
) -> None:
    history = [
        make_log(1, 1, Activity.INPUT, 1.0, "d1", email="a@x.com"),
        make_log(2, 1, Activity.INPUT, 1.0, "d1"),
    ]
    mapping = identity_service.build_mapping(history)

    later_only = [history[1]]

    assert identity_service.count_unique_users(later_only, mapping.device_to_email) == 1
    assert identity_service.count_unique_users(history, mapping.device_to_email) == 1


def test_count_ignores_log_order(identity_service: IdentityService) -> None:
    logs = [
        make_log(1, 1, Activity.INPUT, 1.0, "d1"),
        make_log(2, 1, Activity.INPUT, 1.0, "d2", email="a@x.com"),
        make_log(3, 1, Activity.INPUT, 1.0, "d3", email="b@x.com"),
        make_log(4, 1, Activity.INPUT, 1.0, "d2"),
        make_log(5, 1, Activity.INPUT, 1.0, ""),
    ]
    mapping = identity_service.build_mapping(logs)

    forward = identity_service.count_unique_users(logs, mapping.device_to_email)
    backward = identity_service.count_unique_users(
        list(reversed(logs)), mapping.device_to_email
    )

    assert forward == backward == 3


def test_undecryptable_email_falls_back_to_device(
    identity_service: IdentityService,
) -> None:
    log = make_log(1, 1, Activity.INPUT, 1.0, "d9", email="a@x.com")
    broken = replace(log, email_ciphertext="not-encrypted")

    assert identity_service.count_unique_users([broken], {"d9": "a@x.com"}) == 1
    assert identity_service.count_unique_users([broken, log], {}) == 2

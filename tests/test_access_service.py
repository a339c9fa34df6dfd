"""
Tests for the access reconciliation service.
"""
import logging

import pytest

from app.schemas.access import ReconcileStatus
from app.utils.access import (
    AccessRecord,
    AccessSpecification,
    InvalidArityError,
    ScopeKind,
)


def test_export_and_import_reference(service, guest_scope):
    spec = AccessSpecification.build(
        guest_scope, "2001:db8::1", "22", protocol="portforward", remote_port=8080,
        proxy_ip="fd00::1", proxy_port="22", proxy_user="proxy_user",
    )

    identifier = service.export_reference(spec)

    assert identifier == "grp:alice:[2001:db8::1]:22::portforward:8080:[fd00::1]:22:proxy_user"
    assert service.import_reference(identifier, ScopeKind.GUEST) == spec


def test_import_reference_propagates_decode_error(service, caplog):
    with caplog.at_level(logging.WARNING):
        with pytest.raises(InvalidArityError):
            service.import_reference("g:1.2.3.4:22")

    assert "Rejected access reference" in caplog.text


def test_reconcile_present(service, group_scope):
    spec = AccessSpecification.build(group_scope, "192.168.1.100", "*", user="*")
    records = [
        AccessRecord(ip="10.0.0.1", port="22", user="root"),
        AccessRecord(ip="192.168.1.100", userComment="all users"),
    ]

    result = service.reconcile(spec, records)

    assert result.status is ReconcileStatus.PRESENT
    assert result.identifier == "grp:192.168.1.100:*:*"
    assert result.index == 1
    assert result.record is records[1]
    assert result.current == spec
    assert result.drift is False
    assert result.comment == "all users"


def test_reconcile_absent(service, group_scope):
    """A rule deleted on the bastion is an expected outcome, not an error."""
    spec = AccessSpecification.build(group_scope, "192.168.1.100", "22", protocol="sftp")

    result = service.reconcile(spec, [AccessRecord(ip="192.168.1.100", port="22", user="sftp")])

    assert result.status is ReconcileStatus.ABSENT
    assert result.record is None
    assert result.index is None
    assert result.current is None


def test_find_record(service, group_scope):
    spec = AccessSpecification.build(group_scope, "1.2.3.4", "22", user="root")
    record = AccessRecord(ip="1.2.3.4", port=22, user="root")

    assert service.find_record(spec, [record]) is record
    assert service.find_record(spec, []) is None


def test_reconcile_reports_drift(service, group_scope):
    """A '!sftp' login user matches the bastion's sftp protocol access, which is held as a protocol."""
    spec = AccessSpecification.build(group_scope, "1.2.3.4", "22", user="!sftp")
    record = AccessRecord(ip="1.2.3.4", port="22", user="!sftp")

    result = service.reconcile(spec, [record])

    assert result.status is ReconcileStatus.PRESENT
    assert result.current == AccessSpecification.build(group_scope, "1.2.3.4", "22", protocol="sftp")
    assert result.drift is True


def test_reconcile_with_unrefreshable_record(service, group_scope):
    """Matching never fails, even when the listed access is not a valid specification."""
    spec = AccessSpecification.build(group_scope, "1.2.3.4", "22", user="!telnet")
    record = AccessRecord(ip="1.2.3.4", port="22", user="!telnet")

    result = service.reconcile(spec, [record])

    assert result.status is ReconcileStatus.PRESENT
    assert result.record is record
    assert result.current is None
    assert result.drift is True

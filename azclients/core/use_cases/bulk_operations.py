# azclients/core/use_cases/bulk_operations.py
"""
Translate client-side identity and twin lists into bulk registry entries.

The registry applies a whole list of ``ExportImportDevice`` entries in one
``POST /devices`` call; each entry's ``importMode`` says what to do with it.
These functions are pure so that the sync and async device clients build
identical request bodies.
"""
from typing import Iterable, List, Sequence, Tuple

from azclients.core.domain.exceptions import ArgumentError
from azclients.core.domain.iothub_models import (
    DeviceIdentity,
    DeviceStatus,
    ExportImportDevice,
    ImportMode,
    PropertyContainer,
    TwinData,
)
from azclients.core.domain.preconditions import BulkIfMatchPrecondition
from azclients.shared.validation import assert_not_none, assert_not_none_or_empty

IdentityTwinPairs = Iterable[Tuple[DeviceIdentity, TwinData]]

_UPDATE_MODES = {
    BulkIfMatchPrecondition.UNCONDITIONAL: ImportMode.UPDATE,
    BulkIfMatchPrecondition.IF_MATCH: ImportMode.UPDATE_IF_MATCH_ETAG,
}
_DELETE_MODES = {
    BulkIfMatchPrecondition.UNCONDITIONAL: ImportMode.DELETE,
    BulkIfMatchPrecondition.IF_MATCH: ImportMode.DELETE_IF_MATCH_ETAG,
}
_TWIN_MODES = {
    BulkIfMatchPrecondition.UNCONDITIONAL: ImportMode.UPDATE_TWIN,
    BulkIfMatchPrecondition.IF_MATCH: ImportMode.UPDATE_TWIN_IF_MATCH_ETAG,
}


def update_import_mode(precondition: BulkIfMatchPrecondition) -> ImportMode:
    return _UPDATE_MODES[BulkIfMatchPrecondition(precondition)]


def delete_import_mode(precondition: BulkIfMatchPrecondition) -> ImportMode:
    return _DELETE_MODES[BulkIfMatchPrecondition(precondition)]


def update_twin_import_mode(precondition: BulkIfMatchPrecondition) -> ImportMode:
    return _TWIN_MODES[BulkIfMatchPrecondition(precondition)]


def _status_of(identity: DeviceIdentity) -> DeviceStatus:
    # Anything but an explicit "disabled" registers the device as enabled
    if identity.status is not None and str(identity.status).lower() == DeviceStatus.DISABLED.value:
        return DeviceStatus.DISABLED
    return DeviceStatus.ENABLED


def _properties_of(twin: TwinData) -> PropertyContainer:
    properties = twin.properties
    return PropertyContainer(
        desired=properties.desired if properties is not None else None,
        reported=properties.reported if properties is not None else None,
    )


def _identity_entry(identity: DeviceIdentity, mode: ImportMode, **extra) -> ExportImportDevice:
    assert_not_none(identity, "identity")
    assert_not_none_or_empty(identity.device_id, "device_id")
    return ExportImportDevice(
        id=identity.device_id,
        authentication=identity.authentication,
        capabilities=identity.capabilities,
        device_scope=identity.device_scope,
        parent_scopes=identity.parent_scopes,
        status=_status_of(identity),
        status_reason=identity.status_reason,
        import_mode=mode,
        **extra,
    )


def create_identities_operations(identities: Iterable[DeviceIdentity]) -> List[ExportImportDevice]:
    assert_not_none(identities, "identities")
    return [_identity_entry(identity, ImportMode.CREATE) for identity in identities]


def create_identities_with_twin_operations(devices: IdentityTwinPairs) -> List[ExportImportDevice]:
    """``devices`` is an iterable of (identity, twin) pairs, e.g. ``zip(identities, twins)``."""
    assert_not_none(devices, "devices")

    operations = []
    for identity, twin in devices:
        assert_not_none(twin, "twin")
        operations.append(
            _identity_entry(
                identity,
                ImportMode.CREATE,
                tags=twin.tags,
                properties=_properties_of(twin),
            )
        )
    return operations


def update_identities_operations(
    identities: Iterable[DeviceIdentity],
    precondition: BulkIfMatchPrecondition,
) -> List[ExportImportDevice]:
    assert_not_none(identities, "identities")
    mode = update_import_mode(precondition)
    return [_identity_entry(identity, mode, etag=identity.etag) for identity in identities]


def delete_identities_operations(
    identities: Iterable[DeviceIdentity],
    precondition: BulkIfMatchPrecondition,
) -> List[ExportImportDevice]:
    assert_not_none(identities, "identities")
    mode = delete_import_mode(precondition)
    operations = []
    for identity in identities:
        assert_not_none(identity, "identity")
        assert_not_none_or_empty(identity.device_id, "device_id")
        operations.append(ExportImportDevice(id=identity.device_id, etag=identity.etag, import_mode=mode))
    return operations


def update_twins_operations(
    twins: Iterable[TwinData],
    precondition: BulkIfMatchPrecondition,
) -> List[ExportImportDevice]:
    assert_not_none(twins, "twins")
    mode = update_twin_import_mode(precondition)
    operations = []
    for twin in twins:
        assert_not_none(twin, "twin")
        assert_not_none_or_empty(twin.device_id, "device_id")
        operations.append(
            ExportImportDevice(
                id=twin.device_id,
                tags=twin.tags,
                properties=_properties_of(twin),
                twin_etag=twin.etag,
                import_mode=mode,
            )
        )
    return operations


def check_batch_size(operations: Sequence[ExportImportDevice], limit: int) -> None:
    """The registry accepts between 1 and ``limit`` entries per request."""
    if not operations:
        raise ArgumentError("operations", "a bulk request needs at least one device")
    if len(operations) > limit:
        raise ArgumentError(
            "operations",
            f"{len(operations)} devices exceed the bulk registry limit of {limit} per request",
        )

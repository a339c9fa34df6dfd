"""
Service for reconciling desired bastion accesses with the listed ones.
"""
import logging
from typing import Optional, Sequence, Union

from app.schemas.access import ReconcileResult, ReconcileStatus
from app.utils.access import (
    AccessRecord,
    AccessSpecification,
    DecodeError,
    ScopeKind,
    decode,
    encode,
    find_matching_record,
    matches,
    specification_from_record,
)

logger = logging.getLogger(__name__)


class AccessService:
    """Service for access identifiers and access reconciliation."""

    def export_reference(self, spec: AccessSpecification) -> str:
        """Render the canonical identifier used to reference an access."""
        identifier = encode(spec)
        logger.debug(f"Exported access reference: {identifier}")
        return identifier

    def import_reference(
        self,
        identifier: str,
        scope_kind: Union[ScopeKind, str] = ScopeKind.GROUP,
    ) -> AccessSpecification:
        """
        Rebuild an access from its canonical identifier.

        Raises:
            DecodeError: If the identifier is malformed
        """
        try:
            spec = decode(identifier, scope_kind)
        except DecodeError as e:
            logger.warning(f"Rejected access reference: {e}")
            raise
        logger.info(f"Imported access reference '{identifier}'")
        return spec

    def find_record(
        self, spec: AccessSpecification, records: Sequence[AccessRecord]
    ) -> Optional[AccessRecord]:
        """Return the listed access matching spec, if any."""
        return find_matching_record(spec, records)

    def reconcile(
        self, spec: AccessSpecification, records: Sequence[AccessRecord]
    ) -> ReconcileResult:
        """
        Look up spec among the accesses listed by the bastion.

        An access that is not listed anymore (e.g. deleted outside of the
        configuration) is reported as absent, not as an error.

        Args:
            spec: Desired access
            records: Accesses listed for the scope of spec

        Returns:
            ReconcileResult with the matched record and the access as the
            bastion currently holds it
        """
        identifier = encode(spec)

        for index, record in enumerate(records):
            if not matches(spec, record):
                continue

            logger.debug(f"Access {identifier} matched listed access #{index}")
            try:
                current = specification_from_record(spec.scope, record)
            except ValueError as e:
                # e.g. a "!<name>" user the bastion would read as an unknown protocol
                logger.warning(f"Access {identifier} matched a listed access that cannot be refreshed: {e}")
                current = None

            drift = current != spec
            if drift:
                logger.info(f"Access {identifier} is held differently by the bastion")
            return ReconcileResult(
                status=ReconcileStatus.PRESENT,
                identifier=identifier,
                index=index,
                record=record,
                current=current,
                drift=drift,
                # the bastion reports the comment given on creation as userComment
                comment=record.user_comment if record.user_comment is not None else record.comment,
            )

        logger.info(f"Access {identifier} not found among {len(records)} listed accesses")
        return ReconcileResult(status=ReconcileStatus.ABSENT, identifier=identifier)

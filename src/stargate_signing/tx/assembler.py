"""
Transaction assembly.

Selects a sign mode from the signer's capabilities, builds the matching
signing document, collects signatures and assembles the immutable
SignedTransaction. Signer order is caller-determined and preserved: it is
part of the chain's verification contract, so signatures are never sorted
or deduplicated here.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
import logging

from pydantic import ValidationError

from ..config import SigningConfig
from ..messages.registry import MessageRegistry
from ..runtime.errors import (
    MalformedPayloadError,
    SignatureCountMismatchError,
    SignerOrderMismatchError,
    UnsupportedModeError,
)
from .documents import SigningDocument, build_signing_document
from .encoding import encode_auth_info, encode_tx_body
from .models import Fee, Signature, SignedTransaction, SignerInfo, SignMode, TypedOperation

if TYPE_CHECKING:
    from ..signers.signer import Signer

logger = logging.getLogger(__name__)

OperationLike = Union[TypedOperation, Mapping[str, Any]]
FeeLike = Union[Fee, Mapping[str, Any]]


def as_operations(operations: Iterable[OperationLike]) -> Tuple[TypedOperation, ...]:
    """Normalize TypedOperations and {"typeUrl", "value"} mappings."""
    out = []
    for op in operations:
        if isinstance(op, TypedOperation):
            out.append(op)
        else:
            out.append(TypedOperation.from_encode_object(op))
    return tuple(out)


def as_fee(fee: FeeLike) -> Fee:
    if isinstance(fee, Fee):
        return fee
    try:
        return Fee.model_validate(fee)
    except ValidationError as e:
        raise MalformedPayloadError("fee", str(e), cause=e)


class TransactionAssembler:
    """
    Builds, signs and assembles transactions.

    Stateless apart from its registry and configuration, so one instance may
    serve concurrent callers working on different transactions.
    """

    def __init__(self, registry: MessageRegistry, config: Optional[SigningConfig] = None):
        """
        Initialize assembler.

        Args:
            registry: Registry of supported operation kinds
            config: Signing configuration (mode preference, default memo)
        """
        self.registry = registry
        self.config = config or SigningConfig()

    def select_sign_mode(self, signer: "Signer", preference: Optional[Sequence[SignMode]] = None) -> SignMode:
        """
        Pick the first preferred mode the signer supports.

        Args:
            signer: Signer whose capabilities constrain the choice
            preference: Mode order to try (defaults to config.mode_preference)

        Raises:
            UnsupportedModeError: If no preferred mode is supported
        """
        order = tuple(preference) if preference else self.config.mode_preference
        supported = signer.supported_modes()
        for mode in order:
            if mode in supported:
                return mode
        raise UnsupportedModeError(
            f"{signer.__class__.__name__} supports none of the preferred modes",
            {"preference": [m.name for m in order], "supported": sorted(m.name for m in supported)},
        )

    def build_document(
        self,
        mode: SignMode,
        operations: Iterable[OperationLike],
        fee: FeeLike,
        signer_infos: Sequence[SignerInfo],
        chain_id: str,
        account_number: int,
        memo: Optional[str] = None,
        timeout_height: int = 0,
        signer_index: int = 0,
    ) -> SigningDocument:
        """Build the signing document for one mode using this assembler's registry."""
        return build_signing_document(
            mode, self.registry, as_operations(operations), as_fee(fee), signer_infos,
            chain_id, account_number, self._memo(memo), timeout_height, signer_index,
        )

    def assemble(
        self,
        operations: Iterable[OperationLike],
        fee: FeeLike,
        signatures: Sequence[Signature],
        memo: Optional[str] = None,
        *,
        signer_infos: Sequence[SignerInfo],
        timeout_height: int = 0,
    ) -> SignedTransaction:
        """
        Assemble a signed transaction.

        Args:
            operations: Operations, same as used for the signing document
            fee: Fee, same as used for the signing document
            signatures: One signature per signer info, in signer order
            memo: Memo, same as used for the signing document
            signer_infos: Signer infos used to build the signing document
            timeout_height: Timeout height used for the signing document

        Returns:
            SignedTransaction

        Raises:
            SignatureCountMismatchError: If len(signatures) != len(signer_infos)
            SignerOrderMismatchError: If signature i is not from signer_infos[i]
        """
        if len(signatures) != len(signer_infos):
            raise SignatureCountMismatchError(len(signer_infos), len(signatures))

        for index, (signature, info) in enumerate(zip(signatures, signer_infos)):
            if signature.signer_public_key != info.public_key:
                raise SignerOrderMismatchError(index, "public key differs")
            if signature.mode != info.sign_mode:
                raise SignerOrderMismatchError(
                    index, f"signed in {signature.mode.name}, signer info declares {info.sign_mode.name}"
                )

        ops = as_operations(operations)
        fee = as_fee(fee)
        memo = self._memo(memo)
        body_bytes = encode_tx_body(self.registry, ops, memo, timeout_height)
        auth_info_bytes = encode_auth_info(signer_infos, fee)

        tx = SignedTransaction(
            operations=ops,
            fee=fee,
            signatures=tuple(signatures),
            memo=memo,
            signer_infos=tuple(signer_infos),
            body_bytes=body_bytes,
            auth_info_bytes=auth_info_bytes,
            timeout_height=timeout_height,
        )
        logger.debug(f"Assembled transaction {tx.hash} with {len(signatures)} signature(s)")
        return tx

    def sign_transaction(
        self,
        operations: Iterable[OperationLike],
        fee: FeeLike,
        signer: "Signer",
        *,
        chain_id: str,
        account_number: int,
        sequence: int,
        memo: Optional[str] = None,
        timeout_height: int = 0,
        preference: Optional[Sequence[SignMode]] = None,
    ) -> SignedTransaction:
        """
        Single-signer pipeline: select mode, build, sign, assemble.

        Raises:
            UnsupportedModeError: If the signer supports no preferred mode
            UnknownTypeIdError, MalformedPayloadError, UnsupportedLegacyEncodingError:
                If the document cannot be built (raised before any signing)
            SigningFailureError: If the key operation fails
        """
        return self.sign_multisig(
            operations, fee, [signer],
            chain_id=chain_id, account_number=account_number, sequences=[sequence],
            memo=memo, timeout_height=timeout_height, preference=preference,
        )

    def sign_multisig(
        self,
        operations: Iterable[OperationLike],
        fee: FeeLike,
        signers: Sequence["Signer"],
        *,
        chain_id: str,
        account_number: int,
        sequences: Sequence[int],
        memo: Optional[str] = None,
        timeout_height: int = 0,
        preference: Optional[Sequence[SignMode]] = None,
    ) -> SignedTransaction:
        """
        Multi-signer pipeline.

        Each signer gets its own mode from the preference order. Direct
        signers share one DirectDoc; each legacy signer signs a StdSignDoc
        carrying its own sequence. Every document is built before the first
        signature is produced.

        Raises:
            ValueError: If signers and sequences differ in length or are empty
            UnsupportedModeError, SigningFailureError, and the builder errors
        """
        if not signers:
            raise ValueError("At least one signer is required")
        if len(signers) != len(sequences):
            raise ValueError(f"{len(signers)} signer(s) but {len(sequences)} sequence(s)")

        ops = as_operations(operations)
        fee = as_fee(fee)
        memo = self._memo(memo)

        modes = [self.select_sign_mode(s, preference) for s in signers]
        signer_infos = [s.signer_info(seq, mode) for s, seq, mode in zip(signers, sequences, modes)]

        documents: List[SigningDocument] = []
        shared: Dict[SignMode, SigningDocument] = {}
        for index, mode in enumerate(modes):
            if mode == SignMode.DIRECT:
                if mode not in shared:
                    shared[mode] = build_signing_document(
                        mode, self.registry, ops, fee, signer_infos,
                        chain_id, account_number, memo, timeout_height,
                    )
                documents.append(shared[mode])
            else:
                documents.append(build_signing_document(
                    mode, self.registry, ops, fee, signer_infos,
                    chain_id, account_number, memo, timeout_height, signer_index=index,
                ))

        signatures = [signer.sign(doc) for signer, doc in zip(signers, documents)]
        return self.assemble(ops, fee, signatures, memo, signer_infos=signer_infos,
                             timeout_height=timeout_height)

    def _memo(self, memo: Optional[str]) -> str:
        return self.config.default_memo if memo is None else memo


__all__ = [
    "OperationLike",
    "FeeLike",
    "as_operations",
    "as_fee",
    "TransactionAssembler",
]

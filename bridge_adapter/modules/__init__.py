"""
Functional modules for BridgeClient

- AmountCodec: decimal text <-> base units
- CallEncoder: destination-chain call encoding
- AssetResolver: asset reference -> AssetDescriptor
- BuilderHookComposer: builder-code fee routing and multicall merge
- BalanceGuard: pre-flight balance and token account checks
- BridgeTransactionBuilder: bridge instructions
- SubmissionPipeline: sign, broadcast, confirm
- StageSlot: single pending request
"""

from .amount import AmountCodec
from .calls import CallEncoder, FunctionSignature, parse_signature, encode_function_data
from .assets import AssetResolver
from .builder_hooks import BuilderHookComposer
from .balance import BalanceGuard
from .transaction import BridgeTransactionBuilder
from .submission import SubmissionPipeline
from .staging import StageSlot
from .addresses import AddressResolver, LiteralAddressResolver

__all__ = [
    "AddressResolver",
    "LiteralAddressResolver",
    "AmountCodec",
    "CallEncoder",
    "FunctionSignature",
    "parse_signature",
    "encode_function_data",
    "AssetResolver",
    "BuilderHookComposer",
    "BalanceGuard",
    "BridgeTransactionBuilder",
    "SubmissionPipeline",
    "StageSlot",
]

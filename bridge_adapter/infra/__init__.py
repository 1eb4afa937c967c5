"""
Infrastructure layer for the Bridge Adapter

Provides:
- RpcClient: HTTP RPC wrapper with retry logic
- Signer: Transaction signing abstraction (local keypair)
- TxBuilder: Transaction assembly and sending
- CorrelationContext: Correlation IDs for log tracing
"""

from .rpc import RpcClient, RpcClientConfig
from .solana_signer import (
    Signer,
    LocalSigner,
    create_signer,
)
from .tx_builder import TxBuilder, TxBuilderConfig
from .correlation import (
    CorrelationContext,
    CorrelationFilter,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
    log_with_correlation,
)

__all__ = [
    "RpcClient",
    "RpcClientConfig",
    "Signer",
    "LocalSigner",
    "create_signer",
    "TxBuilder",
    "TxBuilderConfig",
    "CorrelationContext",
    "CorrelationFilter",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "log_with_correlation",
]

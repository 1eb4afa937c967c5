"""
On-chain program and contract definitions

- bridge: Solana bridge program instructions
- token: SPL Token / associated token account helpers
- flywheel: Base-side builder-code contracts
"""

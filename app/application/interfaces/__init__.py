"""Application interfaces (ports): external service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.services import (
    SERVER_TIMESTAMP,
    IBlobStorage,
    IDocumentStore,
    IdentitySession,
    IIdentityProvider,
    IPaymentGateway,
)

__all__ = [
    "SERVER_TIMESTAMP",
    "IBlobStorage",
    "IDocumentStore",
    "IIdentityProvider",
    "IPaymentGateway",
    "IdentitySession",
]

"""
Data Models Package.

Re-exports the seller models and the ServiceResult union:
    from sellerhub.models import Seller, SellerDto, SellerEntity
    from sellerhub.models import SellerFilter, SellerFilterField
    from sellerhub.models import Loading, Success, Error, ServiceResult
"""

from sellerhub.models.seller import Seller, SellerDto, SellerEntity
from sellerhub.models.seller_filter import SellerFilter, SellerFilterField
from sellerhub.models.service_result import (
    Error,
    Loading,
    ServiceResult,
    Success,
    is_terminal,
)

__all__ = [
    "Seller",
    "SellerDto",
    "SellerEntity",
    "SellerFilter",
    "SellerFilterField",
    "Loading",
    "Success",
    "Error",
    "ServiceResult",
    "is_terminal",
]

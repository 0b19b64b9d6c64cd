"""Bank metadata endpoint."""

from pydantic import TypeAdapter

from blink_debit.clients.base import ApiResponse, BaseApi, RequestParams
from blink_debit.models.bank_metadata import BankMetadata

_bank_metadata_list = TypeAdapter(list[BankMetadata])


class BankMetadataApi(BaseApi):
    """``/meta``"""

    async def get_meta(self, params: RequestParams | None = None) -> ApiResponse[list[BankMetadata]]:
        """Return the supported banks and the features each one offers."""
        return await self._send("GET", "/meta", params, parse=_bank_metadata_list.validate_python)

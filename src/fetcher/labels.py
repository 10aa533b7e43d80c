"""Label name to label ID resolution."""

import logging

from .exceptions import LabelListError, LabelNotFoundError
from .gmail_api import TRANSPORT_ERRORS, GmailApi
from .models import Label

logger = logging.getLogger(__name__)


class LabelResolver:
    """Maps a label name to its Gmail label ID.

    Labels are listed fresh on every call; nothing is cached.
    """

    def __init__(self, api: GmailApi):
        self._api = api

    async def list_labels(self) -> list[Label]:
        try:
            labels = await self._api.list_labels()
        except TRANSPORT_ERRORS as e:
            raise LabelListError(f"Failed to list labels: {e}") from e
        return [Label.from_api_response(item) for item in labels]

    async def resolve(self, name: str) -> str:
        """Return the ID of the first label whose name equals name exactly.

        Matching is case-sensitive.

        Raises:
            LabelNotFoundError: If no label has that name
            LabelListError: If the labels listing call fails
        """
        labels = await self.list_labels()
        for label in labels:
            if label.name == name:
                logger.debug("Resolved label %r to %s", name, label.id)
                return label.id
        raise LabelNotFoundError(name, available=[label.name for label in labels])

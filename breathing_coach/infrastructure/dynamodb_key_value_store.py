"""DynamoDB implementation of KeyValueStore."""

import logging
from typing import Optional

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from ..domain.errors import StorageError
from ..domain.interfaces.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class DynamoDBKeyValueStore(KeyValueStore):
    """DynamoDB store keeping one item per key: ``{"key": ..., "value": ...}``."""

    def __init__(self, table_name: str, region_name: str = "us-east-1"):
        """Initialize the DynamoDB key-value store.

        Args:
            table_name: The name of the DynamoDB table.
            region_name: AWS region name (default: us-east-1).
        """
        self.table_name = table_name
        self.region_name = region_name
        self._session = aioboto3.Session()

    async def get(self, key: str) -> Optional[str]:
        """Read a value from DynamoDB.

        Raises:
            StorageError: If DynamoDB cannot be reached or rejects the call.
        """
        try:
            async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
                table = await dynamodb.Table(self.table_name)
                response = await table.get_item(Key={"key": key})
        except (BotoCoreError, ClientError) as e:
            logger.error(f"DynamoDB get_item failed for {key}: {e}")
            raise StorageError(f"Cannot read {key} from {self.table_name}: {e}") from e

        if "Item" not in response:
            return None
        return str(response["Item"]["value"])

    async def set(self, key: str, value: str) -> None:
        """Write a value to DynamoDB.

        Raises:
            StorageError: If DynamoDB cannot be reached or rejects the call.
        """
        try:
            async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
                table = await dynamodb.Table(self.table_name)
                await table.put_item(Item={"key": key, "value": value})
        except (BotoCoreError, ClientError) as e:
            logger.error(f"DynamoDB put_item failed for {key}: {e}")
            raise StorageError(f"Cannot write {key} to {self.table_name}: {e}") from e

# rocksteady_ci/aws/__init__.py
"""
AWS service managers
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import ExternalOperationFailure

logger = logging.getLogger(__name__)


class AWSServiceManager(ABC):
    """
    Base class for AWS service managers
    Credentials are passed explicitly, never picked up from the ambient profile
    """

    def __init__(self, region: str, access_key_id: str, secret_access_key: str,
                 dry_run: bool = False):
        self.region = region
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.dry_run = dry_run
        self._client = None

    @property
    @abstractmethod
    def service_name(self) -> str:
        """Return AWS service name (e.g., 'ecr')"""
        pass

    @property
    def client(self):
        """Lazy-load boto3 client"""
        if self._client is None:
            self._client = boto3.client(
                self.service_name,
                region_name=self.region,
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
            )
        return self._client

    def safe_call(self, operation: str, **kwargs) -> Any:
        """
        Call an AWS API once, turning SDK errors into ExternalOperationFailure
        """
        if self.dry_run:
            logger.info(f"[DRY-RUN] Would call {self.service_name}.{operation}")
            return None

        try:
            method = getattr(self.client, operation)
            response = method(**kwargs)
            logger.debug(f"✅ {self.service_name}.{operation} succeeded")
            return response

        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"❌ {self.service_name}.{operation} failed: {error_code}")
            raise ExternalOperationFailure(f"{self.service_name}.{operation}", error_code) from e

        except BotoCoreError as e:
            logger.error(f"❌ {self.service_name}.{operation} failed: {e}")
            raise ExternalOperationFailure(f"{self.service_name}.{operation}", str(e)) from e


__all__ = ['AWSServiceManager']

# rocksteady_ci/aws/ecr_manager.py
"""
ECR authorization
"""
import base64
import logging

from . import AWSServiceManager

logger = logging.getLogger(__name__)


class ECRManager(AWSServiceManager):
    """Fetches registry credentials for docker login"""

    @property
    def service_name(self) -> str:
        return 'ecr'

    def get_authorization_token(self) -> dict:
        """
        Get ECR authorization token for Docker login

        Returns:
            dict with username, password, and registry host
        """
        logger.debug("Getting ECR authorization token...")

        if self.dry_run:
            logger.info("[DRY-RUN] Would get ECR authorization token")
            return {
                'username': 'AWS',
                'password': 'dry-run-token',
                'registry': f'123456789012.dkr.ecr.{self.region}.amazonaws.com'
            }

        response = self.safe_call('get_authorization_token')
        auth_data = response['authorizationData'][0]

        auth_token = base64.b64decode(auth_data['authorizationToken']).decode()
        username, password = auth_token.split(':', 1)

        auth_info = {
            'username': username,
            'password': password,
            'registry': auth_data['proxyEndpoint'].replace('https://', '')
        }

        logger.debug(f"✅ Got ECR authorization for {auth_info['registry']}")
        return auth_info

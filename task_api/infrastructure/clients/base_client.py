"""
Shared plumbing for the remote service clients.
One requests.Session per client, a fixed (connect, read) timeout and a single
translation table from remote HTTP statuses to domain exceptions.
"""

import logging
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError as PydanticValidationError

from task_api.config import get_settings
from task_api.domain.models.base import (
    EntityNotFoundError,
    ForbiddenError,
    InvalidArgumentError,
    ServiceUnavailableError,
    RemoteServiceError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class RemoteServiceClient:
    """
    Base class for blocking JSON clients of the sibling services.
    Nothing is retried: every call is a single round trip.
    """

    service_name = "remote"

    def __init__(
        self,
        base_url: str,
        timeout: Optional[Tuple[float, float]] = None,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or get_settings().remote_timeout
        self.session = session or requests.Session()

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()

    def _get(self, path: str, token: str, entity_type: str, entity_id: Any) -> Dict[str, Any]:
        """
        GET a JSON document, forwarding the caller's bearer token.

        Raises:
            EntityNotFoundError: remote 404
            ForbiddenError: remote 403
            InvalidArgumentError: remote 400
            ServiceUnavailableError: remote 503
            RemoteServiceError: any other non-2xx status or a transport failure
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} ({self.service_name} service)")

        try:
            response = self.session.get(
                url,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Accept": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(f"Timeout calling {self.service_name} service at {url}: {e}")
            raise RemoteServiceError(
                f"Timed out waiting for the {self.service_name} service.", self.service_name
            ) from e
        except requests.RequestException as e:
            logger.error(f"Transport error calling {self.service_name} service at {url}: {e}")
            raise RemoteServiceError(
                f"Could not reach the {self.service_name} service.", self.service_name
            ) from e

        if 200 <= response.status_code < 300:
            try:
                return response.json()
            except ValueError as e:
                logger.error(f"Invalid JSON from {self.service_name} service at {url}")
                raise RemoteServiceError(
                    f"Invalid response from the {self.service_name} service.", self.service_name
                ) from e

        raise self._translate_error(response.status_code, entity_type, entity_id)

    def _parse(self, model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
        """Validate a remote payload, treating a malformed body as a remote failure."""
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"Malformed payload from {self.service_name} service: {e}")
            raise RemoteServiceError(
                f"Invalid response from the {self.service_name} service.", self.service_name
            ) from e

    def _translate_error(self, status_code: int, entity_type: str, entity_id: Any) -> Exception:
        if status_code == 404:
            logger.info(f"{entity_type} {entity_id} not found in {self.service_name} service")
            return EntityNotFoundError(
                entity_type,
                entity_id,
                f"{entity_type} with ID {entity_id} not found in the {self.service_name} service.",
            )
        if status_code == 403:
            logger.warning(f"{self.service_name} service denied access to {entity_type} {entity_id}")
            return ForbiddenError(
                f"You do not have permission to access {entity_type.lower()} with ID {entity_id}."
            )
        if status_code == 400:
            logger.warning(f"{self.service_name} service rejected request for {entity_type} {entity_id}")
            return InvalidArgumentError(f"Invalid request for {entity_type.lower()} with ID {entity_id}.")
        if status_code == 503:
            logger.error(f"{self.service_name} service unavailable")
            return ServiceUnavailableError(self.service_name)

        logger.error(
            f"{self.service_name} service returned {status_code} for {entity_type} {entity_id}"
        )
        return RemoteServiceError(
            f"Unexpected response from the {self.service_name} service (HTTP {status_code}).",
            self.service_name,
        )

"""Environment Bootstrap - Ensures the storage containers used by the pipeline exist."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from repositories.interfaces.blob_repository import IBlobRepository

logger = logging.getLogger(__name__)


class BootstrapService:
    """Idempotently creates the results and configuration containers."""

    def __init__(
        self,
        blob_repo: IBlobRepository,
        results_container: str = "test-results",
        configuration_container: str = "configuration",
    ) -> None:
        self.blob_repo = blob_repo
        # (name, public access); the configuration container allows anonymous blob reads
        self.containers: Sequence[Tuple[str, Optional[str]]] = (
            (results_container, None),
            (configuration_container, "blob"),
        )

    def ensure_containers(self) -> List[str]:
        """Create missing containers. Returns the names of containers created."""
        created: List[str] = []
        for name, public_access in self.containers:
            if self.blob_repo.container_exists(name):
                logger.info(f"Container exists | container={name}")
                continue
            self.blob_repo.create_container(name, public_access=public_access)
            created.append(name)
            logger.info(f"Created {name.upper()} container")
        return created

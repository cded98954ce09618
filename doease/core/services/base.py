"""Base service class for business logic."""

from __future__ import annotations

import logging

from doease.infra.logging import get_lazy_logger


class BaseService:
    """Base class for all service classes.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR (always evaluated)
        - self._lazy: Lazy logger for DEBUG (zero overhead when DEBUG disabled)

    Example:
        class TaskService(BaseService):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__()
                self._session = session

            async def delete_task(self, user_id: UUID, task_id: UUID) -> None:
                self.logger.info("Task deleted", extra={"task_id": str(task_id)})
    """

    def __init__(self) -> None:
        class_name = self.__class__.__name__
        self.logger = logging.getLogger(class_name)
        self._lazy = get_lazy_logger(class_name)

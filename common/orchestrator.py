# common/orchestrator.py
# -*- coding: utf-8 -*-
"""
Centralized orchestrator for managing and executing sequences of tasks.
"""

import logging
from typing import Any, Callable, Dict, List, Optional


class Orchestrator:
    """A centralized orchestrator to run a series of defined tasks."""

    def __init__(
        self,
        app_settings: Any,
        orchestrator_logger: Optional[logging.Logger] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initializes the Orchestrator.

        Args:
            app_settings: The application settings object.
            orchestrator_logger: An optional logger instance.
            context: Optional initial shared context.
        """
        self.app_settings = app_settings
        self.logger = orchestrator_logger or logging.getLogger(__name__)
        self.tasks: List[Dict[str, Any]] = []
        # Shared context for tasks to pass state between each other
        self.context: Dict[str, Any] = context if context is not None else {}

    def add_task(
        self,
        name: str,
        func: Callable,
        args: Optional[List[Any]] = None,
        kwargs: Optional[Dict[str, Any]] = None,
    ):
        """
        Adds a task to the execution list.

        Args:
            name: A human-readable name for the task.
            func: The function to execute for this task.
            args: A list of positional arguments to pass to the function.
            kwargs: A dictionary of keyword arguments to pass to the function.
        """
        self.tasks.append({
            "name": name,
            "func": func,
            "args": args or [],
            "kwargs": kwargs or {},
        })
        self.logger.debug(f"Task '{name}' added to the queue.")

    def run(self) -> None:
        """
        Executes all added tasks in sequence.

        Raises:
            Exception: Whatever the first failing task raised. Tasks after it
                never run.
        """
        self.logger.debug("Orchestration started.")
        for i, task in enumerate(self.tasks):
            task_name = task["name"]
            self.logger.debug(
                f"--- Stage {i + 1}: Running task '{task_name}' ---"
            )

            try:
                # Pass the shared context to every function
                task["kwargs"]["context"] = self.context
                task["kwargs"]["app_settings"] = self.app_settings

                result = task["func"](*task["args"], **task["kwargs"])

                self.context[f"{task_name}_result"] = result

                self.logger.debug(
                    f"Task '{task_name}' completed successfully."
                )

            except Exception as e:
                self.logger.debug(
                    f"Task '{task_name}' failed: {e}. Halting orchestration."
                )
                raise

        self.logger.debug("Orchestration finished.")

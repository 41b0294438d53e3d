# tests/common/test_orchestrator.py
# -*- coding: utf-8 -*-
"""
Tests for the centralized orchestrator module.
"""

from unittest.mock import MagicMock

import pytest

from common.orchestrator import Orchestrator


class TestOrchestrator:
    """Tests for the Orchestrator class."""

    def test_init(self):
        """Test initialization of the Orchestrator class."""
        app_settings = MagicMock()
        logger = MagicMock()

        orchestrator = Orchestrator(app_settings, logger)

        assert orchestrator.app_settings == app_settings
        assert orchestrator.logger == logger
        assert orchestrator.tasks == []
        assert orchestrator.context == {}

    def test_init_with_shared_context(self):
        """A caller-provided context dict is used as-is."""
        shared = {"seed": 1}
        orchestrator = Orchestrator(MagicMock(), MagicMock(), shared)

        assert orchestrator.context is shared

    def test_add_task(self):
        """Test adding a task to the orchestrator."""
        orchestrator = Orchestrator(MagicMock(), MagicMock())

        task_func = MagicMock()
        orchestrator.add_task(
            "Test Task",
            task_func,
            ["arg1", "arg2"],
            {"kwarg1": "value1"},
        )

        assert len(orchestrator.tasks) == 1
        task = orchestrator.tasks[0]
        assert task["name"] == "Test Task"
        assert task["func"] == task_func
        assert task["args"] == ["arg1", "arg2"]
        assert task["kwargs"] == {"kwarg1": "value1"}

    def test_run_success(self):
        """Test running the orchestrator with successful tasks."""
        orchestrator = Orchestrator(MagicMock(), MagicMock())

        task1 = MagicMock(return_value="result1")
        task2 = MagicMock(return_value="result2")

        orchestrator.add_task("Task 1", task1)
        orchestrator.add_task("Task 2", task2)

        orchestrator.run()

        task1.assert_called_once()
        task2.assert_called_once()
        assert orchestrator.context["Task 1_result"] == "result1"
        assert orchestrator.context["Task 2_result"] == "result2"

    def test_run_passes_args_settings_and_context(self):
        """Positional args come first; settings and context are keywords."""
        app_settings = MagicMock()
        orchestrator = Orchestrator(app_settings, MagicMock())
        task = MagicMock()

        orchestrator.add_task("Task", task, args=["a"], kwargs={"k": 1})
        orchestrator.run()

        task.assert_called_once_with(
            "a", k=1, context=orchestrator.context, app_settings=app_settings
        )

    def test_run_failure_propagates(self):
        """The first failure re-raises and later tasks never run."""
        orchestrator = Orchestrator(MagicMock(), MagicMock())
        error = ValueError("Task 1 failed")
        task1 = MagicMock(side_effect=error)
        task2 = MagicMock()
        orchestrator.add_task("Task 1", task1)
        orchestrator.add_task("Task 2", task2)

        with pytest.raises(ValueError) as excinfo:
            orchestrator.run()

        assert excinfo.value is error
        task1.assert_called_once()
        task2.assert_not_called()
        assert "Task 1_result" not in orchestrator.context

    def test_context_passing(self):
        """Test that context is passed to tasks and can be updated by them."""
        orchestrator = Orchestrator(MagicMock(), MagicMock())

        def task1(context, app_settings, **kwargs):
            context["task1_data"] = "data from task 1"
            return "result1"

        def task2(context, app_settings, **kwargs):
            assert context["task1_data"] == "data from task 1"
            context["task2_data"] = "data from task 2"
            return "result2"

        orchestrator.add_task("Task 1", task1)
        orchestrator.add_task("Task 2", task2)

        orchestrator.run()

        assert orchestrator.context["task1_data"] == "data from task 1"
        assert orchestrator.context["task2_data"] == "data from task 2"

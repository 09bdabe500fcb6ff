"""
Unit tests for BackgroundScheduler.

Tests the counter and reminder ticks against a mocked dashboard.
"""

import logging
from unittest.mock import AsyncMock, Mock, patch

import pytest
from domain.exceptions import StorageUnavailable
from domain.value_objects.time_models import NotificationRequest, ReminderFeed
from infrastructure.scheduler import (
    COUNTER_JOB_ID,
    DAILY_REMINDER_JOB_ID,
    REMINDER_JOB_ID,
    BackgroundScheduler,
)


@pytest.fixture
def mock_dashboard():
    dashboard = Mock()
    dashboard.refresh_counter = AsyncMock()
    dashboard.refresh_reminders = AsyncMock(return_value=ReminderFeed())
    return dashboard


class TestBackgroundSchedulerInit:
    """Tests for BackgroundScheduler initialization."""

    def test_init(self, mock_dashboard):
        """Test initialization."""
        scheduler = BackgroundScheduler(mock_dashboard)

        assert scheduler.dashboard == mock_dashboard
        assert scheduler.counter_tick_seconds == 1.0
        assert scheduler.reminder_check_seconds == 60
        assert scheduler.daily_reminder_hour == 0
        assert scheduler.is_running is False
        assert scheduler.scheduler is not None


class TestBackgroundSchedulerStart:
    """Tests for start method."""

    def test_start_scheduler(self, mock_dashboard):
        """Test starting the scheduler."""
        scheduler = BackgroundScheduler(mock_dashboard, daily_reminder_hour=7)

        with (
            patch.object(scheduler.scheduler, "start") as mock_start,
            patch.object(scheduler.scheduler, "add_job") as mock_add_job,
        ):
            scheduler.start()

            # Counter tick, reminder tick and daily reminder job
            assert mock_add_job.call_count == 3
            mock_start.assert_called_once()

            job_ids = [call.kwargs["id"] for call in mock_add_job.call_args_list]
            assert job_ids == [COUNTER_JOB_ID, REMINDER_JOB_ID, DAILY_REMINDER_JOB_ID]
            daily = mock_add_job.call_args_list[2]
            assert daily.args[1] == "cron"
            assert daily.kwargs["hour"] == 7
            for call in mock_add_job.call_args_list:
                assert call.kwargs["max_instances"] == 1
                assert call.kwargs["coalesce"] is True

            assert scheduler.is_running is True

    def test_start_scheduler_already_running(self, mock_dashboard):
        """Test that starting already-running scheduler is idempotent."""
        scheduler = BackgroundScheduler(mock_dashboard)
        scheduler.is_running = True

        with patch.object(scheduler.scheduler, "add_job") as mock_add_job:
            scheduler.start()

            mock_add_job.assert_not_called()


class TestBackgroundSchedulerStop:
    """Tests for stop method."""

    def test_stop_scheduler(self, mock_dashboard):
        """Test stopping the scheduler."""
        scheduler = BackgroundScheduler(mock_dashboard)
        scheduler.is_running = True

        with patch.object(scheduler.scheduler, "shutdown") as mock_shutdown:
            scheduler.stop()

            mock_shutdown.assert_called_once_with(wait=False)
            assert scheduler.is_running is False

    def test_stop_scheduler_not_running(self, mock_dashboard):
        """Test stopping scheduler that's not running."""
        scheduler = BackgroundScheduler(mock_dashboard)

        with patch.object(scheduler.scheduler, "shutdown") as mock_shutdown:
            scheduler.stop()

            mock_shutdown.assert_not_called()


class TestBackgroundSchedulerTicks:
    """Tests for the job bodies."""

    async def test_refresh_counter(self, mock_dashboard):
        scheduler = BackgroundScheduler(mock_dashboard)

        await scheduler._refresh_counter()

        mock_dashboard.refresh_counter.assert_awaited_once()

    async def test_check_reminders(self, mock_dashboard, caplog):
        mock_dashboard.refresh_reminders.return_value = ReminderFeed(
            dispatched=[NotificationRequest(title="Today: Our Anniversary", body="Today is Our Anniversary")]
        )
        scheduler = BackgroundScheduler(mock_dashboard)

        with caplog.at_level(logging.INFO, logger="BackgroundScheduler"):
            await scheduler._check_reminders()

        mock_dashboard.refresh_reminders.assert_awaited_once()
        assert "Sent 1 notification(s)" in caplog.text

    async def test_storage_failure_does_not_raise(self, mock_dashboard):
        mock_dashboard.refresh_counter.side_effect = StorageUnavailable("locked")
        mock_dashboard.refresh_reminders.side_effect = StorageUnavailable("locked")
        scheduler = BackgroundScheduler(mock_dashboard)

        await scheduler._refresh_counter()
        await scheduler._check_reminders()

    async def test_repeated_failure_logged_once(self, mock_dashboard, caplog):
        mock_dashboard.refresh_counter.side_effect = StorageUnavailable("locked")
        scheduler = BackgroundScheduler(mock_dashboard)

        with caplog.at_level(logging.ERROR, logger="BackgroundScheduler"):
            for _ in range(3):
                await scheduler._refresh_counter()

        errors = [record for record in caplog.records if record.levelno == logging.ERROR]
        assert len(errors) == 1

    async def test_recovery_resets_error(self, mock_dashboard):
        mock_dashboard.refresh_counter.side_effect = [StorageUnavailable("locked"), None]
        scheduler = BackgroundScheduler(mock_dashboard)

        await scheduler._refresh_counter()
        assert scheduler._last_error is not None

        await scheduler._refresh_counter()
        assert scheduler._last_error is None

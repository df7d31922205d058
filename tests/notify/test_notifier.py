"""Tests for the break notifier."""

from breaktimer_app.config.notification import NotificationParams, SoundConfig
from breaktimer_app.errors import NotificationUnavailableError
from breaktimer_app.notify.base import DeliveryStatus, PermissionState
from breaktimer_app.notify.notifier import BreakNotifier, build_notifier
from breaktimer_app.notify.os_alert import OsAlertChannel
from breaktimer_app.notify.sound import SoundChannel
from breaktimer_app.notify.toast import ToastChannel


class TestSupportsNotifications:
    """Test the capability check."""

    def test_supported_with_os_channel(self, notifier):
        assert notifier.supports_notifications() is True

    def test_unsupported_without_os_channel(self, make_channel):
        notifier = BreakNotifier(channels=[make_channel(name="toast")])
        assert notifier.supports_notifications() is False

    def test_unsupported_when_os_channel_missing(self, make_channel):
        os_channel = make_channel(name="os_alert", requires_permission=True, supported=False)
        notifier = BreakNotifier(channels=[os_channel])
        assert notifier.supports_notifications() is False


class TestRequestPermission:
    """Test the permission flow."""

    def test_grants_permission(self, notifier, os_channel):
        assert notifier.request_permission() == PermissionState.GRANTED
        assert os_channel.permission_requests == 1

    def test_idempotent_once_granted(self, notifier, os_channel):
        notifier.request_permission()
        notifier.request_permission()
        assert os_channel.permission_requests == 1

    def test_denied_is_never_asked_again(self, make_channel):
        os_channel = make_channel(name="os_alert", requires_permission=True, grant=False)
        notifier = BreakNotifier(channels=[os_channel])

        assert notifier.request_permission() == PermissionState.DENIED
        assert notifier.request_permission() == PermissionState.DENIED
        assert os_channel.permission_requests == 1

    def test_unsupported_keeps_default(self, make_channel):
        os_channel = make_channel(name="os_alert", requires_permission=True, supported=False)
        notifier = BreakNotifier(channels=[os_channel])

        assert notifier.request_permission() == PermissionState.DEFAULT
        assert os_channel.permission_requests == 0

    def test_failing_request_counts_as_denied(self, make_channel):
        os_channel = make_channel(name="os_alert", requires_permission=True)

        def explode():
            raise RuntimeError("dbus down")

        os_channel.request_permission = explode
        notifier = BreakNotifier(channels=[os_channel])

        assert notifier.request_permission() == PermissionState.DENIED


class TestNotify:
    """Test fan-out and degradation."""

    def test_all_channels_after_permission(self, notifier, os_channel, toast_channel):
        notifier.request_permission()

        results = notifier.notify("Time for a break!")

        assert [r.status for r in results] == [DeliveryStatus.SUCCESS, DeliveryStatus.SUCCESS]
        assert os_channel.messages == ["Time for a break!"]
        assert toast_channel.messages == ["Time for a break!"]

    def test_os_channel_skipped_without_permission(self, notifier, os_channel, toast_channel):
        results = notifier.notify("Time for a break!")

        statuses = {r.channel: r.status for r in results}
        assert statuses == {"os_alert": DeliveryStatus.SKIPPED, "toast": DeliveryStatus.SUCCESS}
        assert os_channel.messages == []
        assert toast_channel.messages == ["Time for a break!"]

    def test_unavailable_channel_is_skipped(self, make_channel, toast_channel):
        sound = make_channel(
            name="sound",
            error=NotificationUnavailableError("no player", channel="sound")
        )
        notifier = BreakNotifier(channels=[sound, toast_channel])

        results = notifier.notify("Time for a break!")

        assert results[0].status == DeliveryStatus.SKIPPED
        assert isinstance(results[0].error, NotificationUnavailableError)
        assert toast_channel.messages == ["Time for a break!"]

    def test_failing_channel_does_not_raise(self, make_channel, toast_channel):
        broken = make_channel(name="broken", error=RuntimeError("boom"))
        notifier = BreakNotifier(channels=[broken, toast_channel])

        results = notifier.notify("Time for a break!")

        assert results[0].status == DeliveryStatus.FAILED
        assert broken.get_stats()["error_count"] == 1
        assert toast_channel.messages == ["Time for a break!"]

    def test_disabled_channels_are_ignored(self):
        params = NotificationParams(sound=SoundConfig(enabled=False))
        notifier = build_notifier(params)

        results = notifier.notify("Time for a break!")

        assert "sound" not in [r.channel for r in results]

    def test_no_channels(self):
        assert BreakNotifier(channels=[]).notify("Time for a break!") == []


class TestBuildNotifier:
    """Test the default channel set."""

    def test_default_channels(self):
        notifier = build_notifier()

        assert [type(c) for c in notifier.channels] == [OsAlertChannel, SoundChannel, ToastChannel]
        assert notifier.permission == PermissionState.DEFAULT

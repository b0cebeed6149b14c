"""Tests for the navigation badge counters."""

from __future__ import annotations

from storeadmin.application.use_cases.notifications import (
    get_all_navigation_notification_counts,
    get_marketing_notification_count,
    get_navigation_section_counts,
    get_store_orders_notification_count,
    get_system_notification_count,
)


def test_manual_orders_never_count_towards_store_badge(session, add_notification) -> None:
    add_notification(type="order", relatedType="order", metadata={"orderType": "online"})
    add_notification(type="order", relatedType="order", metadata={"orderType": "manual"})

    result = get_store_orders_notification_count(session)

    assert result.success is True
    assert result.data == 1


def test_store_badge_requires_order_relation_and_unread(session, add_notification) -> None:
    add_notification(type="order", relatedType="order")
    add_notification(type="order", relatedType=None)
    add_notification(type="order", relatedType="order", isRead=True)
    add_notification(type="error", relatedType="order")

    assert get_store_orders_notification_count(session).data == 1


def test_system_badge_breaks_down_by_type(session, add_notification) -> None:
    add_notification(type="security")
    add_notification(type="security")
    add_notification(type="maintenance")
    add_notification(type="error")
    add_notification(type="warning", isRead=True)
    add_notification(type="info")

    result = get_system_notification_count(session)

    assert result.data == {
        "count": 4,
        "breakdown": {"security": 2, "maintenance": 1, "error": 1, "warning": 0},
    }


def test_marketing_badge_needs_report_or_campaign_metadata(session, add_notification) -> None:
    add_notification(type="report", metadata={"reportType": "monthly"})
    add_notification(type="info", metadata={"campaignType": "newsletter"})
    add_notification(type="info", metadata={})
    add_notification(type="report", metadata={})
    add_notification(type="warning", metadata={"campaignType": "newsletter"})

    assert get_marketing_notification_count(session).data == 2


def test_combined_counts_sum_sections(session, add_notification) -> None:
    add_notification(type="order", relatedType="order")
    add_notification(type="security")
    add_notification(type="maintenance", userId="admin-2")
    add_notification(type="report", metadata={"reportType": "monthly"})

    everything = get_all_navigation_notification_counts(session)
    admin_one = get_all_navigation_notification_counts(session, "admin-1")

    assert everything.data["store"] == 1
    assert everything.data["system"] == 2
    assert everything.data["marketing"] == 1
    assert everything.data["total"] == 4
    assert everything.data["system_breakdown"]["maintenance"] == 1
    assert admin_one.data["system"] == 1
    assert admin_one.data["total"] == 3


def test_section_subset_and_unknown_section(session, add_notification) -> None:
    add_notification(type="security")

    subset = get_navigation_section_counts(session, ["system", "system"])
    unknown = get_navigation_section_counts(session, ["billing"])

    assert subset.data == {"system": 1}
    assert unknown.success is False
    assert "billing" in unknown.error

"""
Unit tests for customer aggregates.
"""

import pytest

from service_segmentation.app.audience.snapshot import DeliveryCounts
from service_segmentation.app.audience.stats import (
    CampaignSummary, SegmentSummary, segment_breakdown, audience_summary, campaign_summary
)


class TestSegmentBreakdown:
    """Test cases for segment_breakdown."""

    def test_default_segments(self, customers):
        breakdown = segment_breakdown(customers)

        assert [summary.name for summary in breakdown] == ["VIP", "Premium", "Regular", "New"]
        assert breakdown[2] == SegmentSummary(name="Regular", count=2, revenue=19500, share=40.0)
        assert breakdown[0].share == pytest.approx(20.0)

    def test_custom_segments(self, customers):
        breakdown = segment_breakdown(customers, segments=["Gold"])

        assert breakdown == [SegmentSummary(name="Gold", count=0, revenue=0, share=0.0)]

    def test_empty_collection(self):
        breakdown = segment_breakdown([], segments=["VIP"])

        assert breakdown[0].count == 0
        assert breakdown[0].share == 0.0


class TestAudienceSummary:
    """Test cases for audience_summary."""

    def test_summary(self, customers):
        summary = audience_summary(customers)

        assert summary.total == 5
        assert summary.active == 4
        assert summary.total_revenue == 62500
        assert summary.average_order_value == pytest.approx(62500 / 35)

    def test_empty(self):
        summary = audience_summary([])

        assert summary.total == 0
        assert summary.average_order_value == 0.0


class TestCampaignSummary:
    """Test cases for campaign_summary."""

    def test_no_campaigns(self):
        assert campaign_summary([]) == CampaignSummary(
            campaigns=0, total_sent=0, average_rate=0.0, overall_rate=0
        )

    def test_several_campaigns(self):
        summary = campaign_summary([
            DeliveryCounts(sent=9, failed=1),
            DeliveryCounts(sent=3, failed=1),
            DeliveryCounts(sent=0, failed=0),
        ])

        assert summary.campaigns == 3
        assert summary.total_sent == 12
        assert summary.average_rate == pytest.approx((90 + 75 + 0) / 3)
        assert summary.overall_rate == 86

    def test_only_empty_audiences(self):
        summary = campaign_summary([DeliveryCounts(sent=0, failed=0)])

        assert summary.average_rate == 0.0
        assert summary.overall_rate == 0

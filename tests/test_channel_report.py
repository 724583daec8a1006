# tests/test_channel_report.py
import json
import random

import pytest

from constants import MAX_PARSED_NUMBER
from services import analyze
from services.channel_report import IMPORTED, SYNTHETIC, apply_known_location
from services.config import StatsConfig
from services.stats_errors import GrowthDataError
from services.stats_models import ParsedStats
from services.stats_parser import match
from utils.core import round_half_up


def test_analyze_demo(demo_text, seeded_rng, fixed_now):
    report = analyze(demo_text, rng=seeded_rng, now=fixed_now)
    parsed, derived, history = report.as_tuple()

    assert parsed.subscribers == "1.2M"
    assert derived.avg_views_per_video == 133_333
    assert derived.estimated_monthly_revenue == 3753
    assert len(history) == 6
    assert history[-1].subscribers == 1_200_000
    assert report.history_source == SYNTHETIC
    assert set(report.audience) == {"18-24", "25-34", "35-44", "45-54", "55+"}


HUGE = "1" + "0" * 320


@pytest.mark.parametrize(
    "text",
    [
        "",
        None,
        "::::",
        "@",
        "Subscribers: ???",
        "\x00\x01 weird",
        "Views: 1e999",
        f"Total Views: {HUGE}\nTotal Videos: 3",
        f"Subscribers: {HUGE}",
        f"Subscribers: {HUGE}B\nTotal Views: {HUGE}\nTotal Videos: 1\nEngagement Rate: {HUGE}%",
        f"Total Views: 5M\nTotal Videos: 10\nUpload Frequency: {HUGE} videos per day",
    ],
)
def test_analyze_never_raises_on_garbage(text):
    report = analyze(text, rng=random.Random(0))
    assert len(report.history) == 6
    json.dumps(report.to_dict())


def test_huge_counts_are_capped(fixed_now):
    report = analyze(
        f"Subscribers: {HUGE}\nTotal Views: {HUGE}\nTotal Videos: 3",
        rng=random.Random(0),
        now=fixed_now,
    )
    assert report.history[-1].subscribers == MAX_PARSED_NUMBER
    assert report.derived.avg_views_per_video == round_half_up(MAX_PARSED_NUMBER / 3)
    assert report.derived.estimated_monthly_revenue > 0


def test_analyze_is_reproducible(generated_text, fixed_now):
    first = analyze(generated_text, rng=random.Random(3), now=fixed_now)
    second = analyze(generated_text, rng=random.Random(3), now=fixed_now)
    assert first == second


def test_config_seed_makes_history_reproducible(demo_text, fixed_now):
    config = StatsConfig(history_seed=11)
    first = analyze(demo_text, now=fixed_now, config=config)
    second = analyze(demo_text, now=fixed_now, config=config)
    assert first.history == second.history


def test_known_location_fills_missing_location():
    report = analyze("Subscribers: 50K\nTotal Views: 2M\nTotal Videos: 100", known_location="India")
    assert report.parsed.location == "India"
    assert not report.parsed.is_present("location")
    assert report.derived.cpm_rate == 0.2


def test_text_location_beats_known_location(demo_text):
    report = analyze(demo_text, known_location="India")
    assert report.parsed.location == "United States"
    assert report.derived.cpm_rate == 2.5


def test_apply_known_location_ignores_blank():
    parsed = match("Subscribers: 5")
    assert apply_known_location(parsed, "   ") is parsed
    assert apply_known_location(parsed, None) is parsed


def test_growth_csv_replaces_synthetic_history(demo_text, growth_csv_text):
    report = analyze(demo_text, growth_csv=growth_csv_text)
    assert report.history_source == IMPORTED
    assert [p.month for p in report.history] == ["Jan", "Feb"]
    assert report.history[0].revenue == 3000
    assert len(report.growth_rows) == 2


def test_malformed_growth_csv_raises(demo_text):
    with pytest.raises(GrowthDataError):
        analyze(demo_text, growth_csv="Month,Subs,Views\nJan,1,2")


def test_report_to_dict_is_json_serializable(generated_text, fixed_now):
    data = analyze(generated_text, rng=random.Random(5), now=fixed_now).to_dict()
    encoded = json.loads(json.dumps(data))
    assert encoded["parsed"]["channel_name"] == "Pixel Kitchen"
    assert encoded["derived"]["age_known"] is True
    assert len(encoded["history"]) == 6
    assert encoded["history_source"] == "synthetic"


def test_default_parsed_stats_round_trip():
    assert ParsedStats.from_matches({}) == ParsedStats()

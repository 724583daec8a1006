"""
Pytest configuration for channel statistics tests.
"""

import importlib
import os
import random
import sys
from datetime import datetime, timezone
from typing import Dict, List

import pytest

# Ensure project root is importable
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Minimal contract mapping: modules -> expected attributes
DEFAULT_EXPECTED_EXPORTS: Dict[str, List[str]] = {
    "services.stats_parser": ["match", "match_fields", "FIELD_RULES"],
    "services.stats_metrics": ["derive", "calculate_growth_rate", "estimate_monthly_revenue"],
    "services.history": ["synthesize"],
    "services.growth_csv": ["parse_growth_csv"],
    "services.channel_report": ["analyze", "ChannelReport"],
    "utils.formatting": ["parse_number"],
}

_validated = False


def _check_module_exports(module_name: str, keys: List[str]):
    """Import a module and assert it exports the given keys."""
    mod = importlib.import_module(module_name)
    missing = [k for k in keys if not hasattr(mod, k)]
    if missing:
        raise AssertionError(f"Module {module_name} missing exports: {missing}")


@pytest.fixture(autouse=True, scope="session")
def validate_module_contracts():
    """Validate module contracts once per session."""
    global _validated
    if not _validated:
        for mod, keys in DEFAULT_EXPECTED_EXPORTS.items():
            _check_module_exports(mod, keys)
        _validated = True
    yield


DEMO_TEXT = (
    "Channel Name: DemoChan\n"
    "Subscribers: 1.2M\n"
    "Total Views: 45,600,000\n"
    "Total Videos: 342\n"
    "Location: United States"
)

GENERATED_TEXT = """## 📊 Channel Overview
**Channel Name:** Pixel Kitchen
- **Subscribers:** 245K subscribers
- **All-time Views:** 38.2M (approx.)
- **Total Videos:** 1,024
- **Joined YouTube:** Mar 15, 2019
- **Location:** Canada
- **Upload Frequency:** 3 videos/week

### Engagement
- Engagement Rate: 6.4%
- Like-to-View Ratio: 4.2%
- Comment-to-View Ratio: 0.8%
- Viral Score: 81/100
- Content Score: 88/100

Follow @pixelkitchen for weekly recipes.
"""


@pytest.fixture
def demo_text() -> str:
    return DEMO_TEXT


@pytest.fixture
def generated_text() -> str:
    """Markdown-heavy answer in the shape the text generator produces."""
    return GENERATED_TEXT


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def growth_csv_text() -> str:
    return (
        "Month,Subscribers,Views,Engagement,Retention,CTR\n"
        "Jan,245000,1200000,8.2,68,7.5\n"
        "Feb,251000,1350000,8.7,71,7.8\n"
    )

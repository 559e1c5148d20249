"""
Unit tests for explorer.py

Career explorer profile and the detail panel values.
"""

import math

from explorer import JobProfile, explore_job, format_salary, job_details_outputs, job_titles
from palette import ADOPTION_COLORS, GROWTH_COLORS


class TestJobTitles:
    def test_sorted_distinct(self, records):
        assert job_titles(records) == ["Data Scientist", "Nurse", "Software Engineer"]


class TestExploreJob:
    """Test explore_job() aggregates"""

    def test_mean_salary(self, records):
        """100000, 120000 and 140000 average to 120000"""
        assert explore_job(records, "Data Scientist").mean_salary == 120000

    def test_modal_labels(self, records):
        profile = explore_job(records, "Data Scientist")
        assert profile.growth == "Growth"
        assert profile.ai_adoption == "High"
        assert profile.automation_risk == "Low"

    def test_modal_tie_goes_to_first_seen(self, records):
        """Nurse has one Stable and one Decline row; Stable comes first"""
        assert explore_job(records, "Nurse").growth == "Stable"

    def test_top_skills_and_locations(self, records):
        profile = explore_job(records, "Data Scientist")
        assert profile.top_skills == [("Python", 2), ("SQL", 1)]
        assert profile.top_locations == [("San Francisco", 2), ("Berlin", 1)]

    def test_top_lists_capped_at_five(self, records):
        import pandas as pd
        rows = pd.DataFrame({
            'job_title': ["Analyst"] * 7,
            'salary': [1.0] * 7,
            'growth_projection': ["Growth"] * 7,
            'ai_adoption': ["Low"] * 7,
            'automation_risk': ["Low"] * 7,
            'skills': [f"skill {i}" for i in range(7)],
            'location': [f"city {i}" for i in range(7)],
        })
        profile = explore_job(rows, "Analyst")
        assert [s for s, _ in profile.top_skills] == [f"skill {i}" for i in range(5)]
        assert len(profile.top_locations) == 5

    def test_only_selected_title(self, records):
        assert explore_job(records, "Nurse").count == 2

    def test_unknown_title(self, records):
        assert explore_job(records, "Astronaut") is None

    def test_returns_profile(self, records):
        assert isinstance(explore_job(records, "Nurse"), JobProfile)


class TestFormatSalary:
    def test_grouping_and_rounding(self):
        assert format_salary(123456.7) == "$123,457"

    def test_nan(self):
        assert format_salary(math.nan) == "n/a"


class TestJobDetailsOutputs:
    """Test job_details_outputs() panel values"""

    def test_selected_job(self, records):
        (salary, growth, growth_style, ai, ai_style, risk,
         skills, locations, panel_class) = job_details_outputs(records, "Data Scientist")

        assert salary == "$120,000"
        assert growth == "Growth"
        assert growth_style == {'color': GROWTH_COLORS["Growth"]}
        assert ai == "High"
        assert ai_style == {'color': ADOPTION_COLORS["High"]}
        assert risk == "Low"
        assert [tag.children for tag in skills] == ["Python (2)", "SQL (1)"]
        assert {tag.className for tag in skills} == {"skill-tag"}
        assert [tag.children for tag in locations] == ["San Francisco (2)", "Berlin (1)"]
        assert {tag.className for tag in locations} == {"location-item"}
        assert panel_class == "job-details"

    def test_cleared_selection_hides_panel(self, records):
        assert job_details_outputs(records, None)[-1] == "hidden"
        assert job_details_outputs(records, "")[-1] == "hidden"

    def test_unknown_title_hides_panel(self, records):
        outputs = job_details_outputs(records, "Astronaut")
        assert outputs[-1] == "hidden"
        assert outputs[6] == [] and outputs[7] == []

"""
Career explorer: per-title profile behind the job lookup panel.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from dash import html

from aggregations import count_by, mode, rank
from palette import category_color

logger = logging.getLogger(__name__)

TOP_N = 5


@dataclass(frozen=True)
class JobProfile:
    title: str
    count: int
    mean_salary: float
    growth: str
    ai_adoption: str
    automation_risk: str
    top_skills: List[Tuple[str, int]] = field(default_factory=list)
    top_locations: List[Tuple[str, int]] = field(default_factory=list)


def job_titles(records):
    """Distinct job titles, sorted for the select control."""
    return sorted(records['job_title'].unique())


def explore_job(records, title) -> Optional[JobProfile]:
    """
    Summarize every posting with the given title.

    Returns None when no record carries that title.
    """
    job_data = records[records['job_title'] == title]
    if job_data.empty:
        return None

    profile = JobProfile(
        title=title,
        count=len(job_data),
        mean_salary=float(job_data['salary'].mean()),
        growth=mode(job_data, 'growth_projection'),
        ai_adoption=mode(job_data, 'ai_adoption'),
        automation_risk=mode(job_data, 'automation_risk'),
        top_skills=rank(count_by(job_data, 'skills'), limit=TOP_N),
        top_locations=rank(count_by(job_data, 'location'), limit=TOP_N),
    )
    logger.debug("Explorer profile for %s built from %d rows", title, profile.count)
    return profile


def format_salary(value):
    if value != value:  # NaN
        return 'n/a'
    return f"${value:,.0f}"


def _tags(items, class_name):
    return [html.Span(f"{label} ({count})", className=class_name) for label, count in items]


def job_details_outputs(records, title):
    """
    Values for the detail panel outputs, in callback order:
    salary, growth, growth style, ai, ai style, risk, skills, locations, panel class.

    An empty or unknown selection hides the panel and leaves the fields blank.
    """
    profile = explore_job(records, title) if title else None
    if profile is None:
        return ('', '', {}, '', {}, '', [], [], 'hidden')

    return (
        format_salary(profile.mean_salary),
        profile.growth,
        {'color': category_color('growth_projection', profile.growth)},
        profile.ai_adoption,
        {'color': category_color('ai_adoption', profile.ai_adoption)},
        profile.automation_risk,
        _tags(profile.top_skills, 'skill-tag'),
        _tags(profile.top_locations, 'location-item'),
        'job-details',
    )

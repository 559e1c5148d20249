"""
Grouping and summary helpers shared by every chart and the career explorer.

All functions are pure: they read the record set and return fresh values,
never mutating their input.
"""

import logging

import pandas as pd

logger = logging.getLogger(__name__)

AI_LEVELS = ['Low', 'Medium', 'High']
AI_LEVEL_WEIGHTS = {'High': 3, 'Medium': 2, 'Low': 1}

TOP_ROLES = 12
TOP_SKILLS = 10


# ============================================
# GENERIC UTILITIES
# ============================================

def rollup(records, key, reducer):
    """
    Group `records` by the `key` column and reduce each group.

    Returns a dict keyed by the distinct values of `key` in first-seen order.
    Groups only exist for observed keys, so no group is ever empty.
    """
    if records.empty:
        return {}
    return {
        value: reducer(group)
        for value, group in records.groupby(key, sort=False, dropna=False)
    }


def count_by(records, key):
    """Rows per distinct value of `key`, in first-seen order."""
    return rollup(records, key, len)


def rank(values, limit=None):
    """
    Sort a {key: value} mapping by value, highest first.

    Ties keep the mapping's insertion order, which for rollup results is the
    first-seen order of the rows.
    """
    ranked = sorted(values.items(), key=lambda item: item[1], reverse=True)
    return ranked if limit is None else ranked[:limit]


def mode(records, key):
    """Most frequent value of `key`; ties go to the value seen first. None when empty."""
    ranked = rank(count_by(records, key), limit=1)
    return ranked[0][0] if ranked else None


def five_number_summary(values):
    """
    min / Q1 / median / Q3 / max of the numeric values, using linear
    interpolation between order statistics. NaN values are ignored.

    Returns None for an empty sequence.
    """
    series = pd.Series(values, dtype='float64').dropna().sort_values(ignore_index=True)
    if series.empty:
        return None
    q1, median, q3 = series.quantile([0.25, 0.5, 0.75], interpolation='linear')
    return {
        'min': float(series.iloc[0]),
        'q1': float(q1),
        'median': float(median),
        'q3': float(q3),
        'max': float(series.iloc[-1]),
        'count': int(len(series)),
    }


# ============================================
# CHART ANALYTICS
# ============================================

def exposure_score(group):
    """Weighted mean of AI adoption with High=3, Medium=2, Low=1."""
    levels = group['ai_adoption']
    weighted = sum(weight * int((levels == level).sum()) for level, weight in AI_LEVEL_WEIGHTS.items())
    return weighted / len(group)


def ai_exposure_scores(records, limit=TOP_ROLES):
    """Top roles by AI exposure score as a DataFrame of (job, score)."""
    scores = rank(rollup(records, 'job_title', exposure_score), limit=limit)
    logger.debug("AI exposure computed for %d roles", len(scores))
    return pd.DataFrame(scores, columns=['job', 'score'])


def skill_counts(records):
    """Rows per skill label, in first-seen order."""
    return count_by(records, 'skills')


def top_skills(records, limit=TOP_SKILLS):
    """Most demanded skills as a DataFrame of (skill, count)."""
    return pd.DataFrame(rank(skill_counts(records), limit=limit), columns=['skill', 'count'])


def compensation_summary(records, levels=AI_LEVELS):
    """
    Five-number salary summary per AI adoption level, in `levels` order.

    A level with no salaried rows maps to None.
    """
    summaries = {}
    for level in levels:
        salaries = records.loc[records['ai_adoption'] == level, 'salary']
        summaries[level] = five_number_summary(salaries)
    return summaries

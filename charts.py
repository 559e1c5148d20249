"""
Plotly figures for the dashboard chapters.

Each builder recomputes its aggregate from the record set on every call and
returns a brand new figure, so a redraw never depends on the previous one.
"""

import logging

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from plotly.colors import hex_to_rgb

from aggregations import AI_LEVELS, ai_exposure_scores, compensation_summary, skill_counts, top_skills
from palette import ADOPTION_COLORS, BAR_COLOR, CLOUD_COLORS, EXPOSURE_COLORSCALE
from view_effects import CHART_MAX_WIDTH

logger = logging.getLogger(__name__)

CHART_HEIGHT = 500
CLOUD_FONT_RANGE = (20, 80)
TRANSITION = dict(duration=800, easing='cubic-in-out')

FONT = 'Inter, sans-serif'
TEXT_COLOR = '#c9d1d9'
MUTED_COLOR = '#94a3b8'
GRID_COLOR = 'rgba(148,163,184,0.15)'


def _axis_title(text):
    return dict(text=text, font=dict(size=12, color=MUTED_COLOR, family=FONT))


def _base_layout(fig, width, margin, **layout):
    fig.update_layout(
        template='plotly_dark',
        width=width,
        height=CHART_HEIGHT,
        margin=margin,
        font=dict(family=FONT, color=TEXT_COLOR),
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        hoverlabel=dict(bgcolor='#161b22', font=dict(family=FONT, size=12)),
        showlegend=False,
        **layout
    )
    return fig


def collapse_bars(fig):
    """Copy of a bar figure with every bar at zero height, the starting frame for the grow-in"""
    collapsed = go.Figure(fig)
    for trace in collapsed.data:
        if trace.type == 'bar':
            trace.y = [0] * len(trace.y)
    return collapsed


def empty_figure(message, width=CHART_MAX_WIDTH):
    """Placeholder figure with a centered message"""
    fig = go.Figure()
    fig.add_annotation(x=0.5, y=0.5, xref='paper', yref='paper', text=message,
                       showarrow=False, font=dict(size=14, color=MUTED_COLOR, family=FONT))
    _base_layout(fig, width, dict(l=20, r=20, t=20, b=20))
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return fig


# ============================================
# CHAPTER 2: AI IMPACT BY ROLE
# ============================================

def create_ai_exposure_chart(records, width=CHART_MAX_WIDTH):
    """AI exposure score by role - top 12, colored on a 1..3 sequential scale"""
    scores = ai_exposure_scores(records)
    if len(scores) == 0:
        return empty_figure("No roles to score", width)

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=scores['job'],
        y=scores['score'],
        marker=dict(
            color=scores['score'],
            colorscale=EXPOSURE_COLORSCALE,
            cmin=1,
            cmax=3,
            line=dict(width=0)
        ),
        hovertemplate='<b>%{x}</b><br>AI Exposure Score: %{y:.2f}/3.0<extra></extra>',
        showlegend=False
    ))

    _base_layout(
        fig, width, dict(l=60, r=30, t=20, b=150),
        xaxis=dict(title=_axis_title('Job Titles / Roles'), tickangle=-45, showgrid=False),
        yaxis=dict(title=_axis_title('AI Exposure / Impact Level'), range=[0, 3], gridcolor=GRID_COLOR),
        barcornerradius=4,
        transition=TRANSITION
    )
    return fig


# ============================================
# CHAPTER 3: IN-DEMAND SKILLS
# ============================================

def word_cloud_layout(counts, width=CHART_MAX_WIDTH, height=CHART_HEIGHT, rng=None):
    """
    Place every skill around a ring with jittered radius.

    `counts` maps skill -> demand. Font size scales linearly from the smallest
    to the largest count; positions are drawn from `rng`, a fresh unseeded
    generator unless one is injected.
    """
    rng = rng if rng is not None else np.random.default_rng()
    words = list(counts.items())
    n = len(words)
    if n == 0:
        return pd.DataFrame(columns=['text', 'count', 'font_size', 'x', 'y', 'color'])

    sizes = np.array([count for _, count in words], dtype=float)
    low, high = sizes.min(), sizes.max()
    if high > low:
        font_sizes = np.interp(sizes, [low, high], CLOUD_FONT_RANGE)
    else:
        font_sizes = np.full(n, sum(CLOUD_FONT_RANGE) / 2)

    angles = np.arange(n) / n * 2 * np.pi
    radius = min(width, height) / 3
    x = np.cos(angles) * radius * (0.5 + rng.random(n) * 0.5)
    y = np.sin(angles) * radius * (0.5 + rng.random(n) * 0.5)

    return pd.DataFrame({
        'text': [skill for skill, _ in words],
        'count': sizes.astype(int),
        'font_size': font_sizes,
        'x': x,
        'y': y,
        'color': [CLOUD_COLORS[i % len(CLOUD_COLORS)] for i in range(n)],
    })


def create_skills_word_cloud(records, width=CHART_MAX_WIDTH, rng=None):
    """All skills sized by demand"""
    words = word_cloud_layout(skill_counts(records), width, CHART_HEIGHT, rng=rng)
    if len(words) == 0:
        return empty_figure("No skills recorded", width)

    fig = go.Figure(go.Scatter(
        x=words['x'],
        y=words['y'],
        mode='text',
        text=words['text'],
        textfont=dict(size=words['font_size'].tolist(), color=words['color'].tolist(), family=FONT),
        customdata=words['count'],
        hovertemplate='<b>%{text}</b><br>Demand: %{customdata} jobs<extra></extra>',
        showlegend=False
    ))

    _base_layout(
        fig, width, dict(l=0, r=0, t=0, b=0),
        xaxis=dict(visible=False, range=[-width / 2, width / 2]),
        yaxis=dict(visible=False, range=[-CHART_HEIGHT / 2, CHART_HEIGHT / 2])
    )
    return fig


def create_skills_bar_chart(records, width=CHART_MAX_WIDTH):
    """Top 10 skills by demand"""
    ranked = top_skills(records)
    if len(ranked) == 0:
        return empty_figure("No skills recorded", width)

    fig = go.Figure()
    fig.add_trace(go.Bar(
        y=ranked['skill'][::-1],
        x=ranked['count'][::-1],
        orientation='h',
        marker=dict(color=BAR_COLOR, line=dict(width=0)),
        hovertemplate='<b>%{y}</b><br>Demand: %{x} jobs<extra></extra>',
        showlegend=False
    ))

    _base_layout(
        fig, width, dict(l=150, r=30, t=20, b=40),
        xaxis=dict(title=_axis_title('Frequency / Demand'), range=[0, ranked['count'].max()],
                   gridcolor=GRID_COLOR),
        yaxis=dict(title=_axis_title('Skills (Technical and Soft)'), showgrid=False),
        barcornerradius=4
    )
    return fig


def create_skills_chart(records, view_state, width=CHART_MAX_WIDTH, rng=None):
    """Word cloud or bar chart, depending on the SkillsViewState"""
    logger.debug("Drawing skills chart in %s mode at width %d", view_state.mode, width)
    if view_state.mode == 'cloud':
        return create_skills_word_cloud(records, width, rng=rng)
    return create_skills_bar_chart(records, width)


# ============================================
# CHAPTER 4: COMPENSATION AND AI
# ============================================

def _fill(hex_color, opacity=0.6):
    r, g, b = hex_to_rgb(hex_color)
    return f'rgba({r},{g},{b},{opacity})'


def create_compensation_chart(records, width=CHART_MAX_WIDTH):
    """Salary box per AI adoption level, built from precomputed quantiles"""
    summaries = compensation_summary(records)
    present = {level: s for level, s in summaries.items() if s is not None}
    if not present:
        return empty_figure("No salary data", width)

    fig = go.Figure()
    for level, s in present.items():
        color = ADOPTION_COLORS[level]
        fig.add_trace(go.Box(
            x=[level],
            lowerfence=[s['min']],
            q1=[s['q1']],
            median=[s['median']],
            q3=[s['q3']],
            upperfence=[s['max']],
            name=level,
            line=dict(color=color, width=2),
            fillcolor=_fill(color),
            hoverinfo='y',
            showlegend=False
        ))

    # Empty levels keep their slot on the axis
    for level, s in summaries.items():
        if s is None:
            fig.add_annotation(x=level, y=0.5, yref='paper', text='No data', showarrow=False,
                               font=dict(size=12, color=MUTED_COLOR, family=FONT))

    _base_layout(
        fig, width, dict(l=80, r=30, t=20, b=60),
        xaxis=dict(title=_axis_title('AI Impact Level'), categoryorder='array',
                   categoryarray=AI_LEVELS, range=[-0.5, len(AI_LEVELS) - 0.5]),
        yaxis=dict(title=_axis_title('Salary / Compensation Levels'),
                   range=[0, max(s['max'] for s in present.values())],
                   tickformat='$~s', gridcolor=GRID_COLOR),
        transition=TRANSITION
    )
    return fig

"""
AI Job Impact - Dash application: layout and callbacks.
"""

import logging
import time

import dash
import dash_bootstrap_components as dbc
import pandas as pd
from dash import ALL, Input, Output, State, ctx, dcc, html

from charts import (
    collapse_bars,
    create_ai_exposure_chart,
    create_compensation_chart,
    create_skills_chart,
)
from explorer import job_details_outputs, job_titles
from view_effects import (
    CHART_MAX_WIDTH,
    COUNT_UP_TICK_MS,
    COUNT_UP_TICKS,
    RESIZE_TICK_MS,
    SAMPLE_INTERVAL_MS,
    VIEWPORT_SAMPLER_JS,
    ResizeDebounce,
    SkillsViewState,
    chapter_class,
    chart_width,
    count_up_value,
    reveal_chapters,
    scroll_progress,
)

logger = logging.getLogger(__name__)

APP_TITLE = "AI & The Future of Work"

GRAPH_CONFIG = {'displayModeBar': False}

CARD_STYLE = {
    'background': '#161b22',
    'borderRadius': '12px',
    'padding': '16px',
    'border': '1px solid #30363d',
    'boxShadow': '0 3px 10px rgba(0,0,0,0.25)'
}

STAT_STYLE = {
    'flex': '1', 'textAlign': 'center', 'padding': '11px',
    'background': '#161b22', 'borderRadius': '10px', 'border': '1px solid #30363d'
}

STAT_VALUE_STYLE = {'color': '#58a6ff', 'fontSize': '26px', 'margin': '0', 'fontWeight': '700'}
STAT_LABEL_STYLE = {'color': '#8b949e', 'fontSize': '11px', 'margin': '3px 0 0 0'}

# Detail outputs, in the order job_details_outputs returns them
JOB_DETAIL_OUTPUTS = [
    Output('job-salary', 'children'),
    Output('job-growth', 'children'),
    Output('job-growth', 'style'),
    Output('job-ai', 'children'),
    Output('job-ai', 'style'),
    Output('job-risk', 'children'),
    Output('job-skills', 'children'),
    Output('job-locations', 'children'),
    Output('job-details', 'className'),
]


# ============================================
# LAYOUT
# ============================================

def _chapter(index, title, subtitle, *children):
    return html.Section([
        html.H2(title, className='chapter-title'),
        html.P(subtitle, className='chapter-subtitle'),
        *children
    ], id={'type': 'chapter', 'index': index}, className='chapter')


def _stat(value, label, value_id=None):
    value_props = {'id': value_id} if value_id else {}
    return html.Div([
        html.H3(value, style=STAT_VALUE_STYLE, **value_props),
        html.P(label, style=STAT_LABEL_STYLE)
    ], style=STAT_STYLE)


def _detail(label, value_id):
    return html.Div([
        html.Span(label, className='detail-label'),
        html.Span(id=value_id, className='detail-value')
    ], className='detail-row')


def build_layout(records):
    median_salary = records['salary'].median()
    skills_view = SkillsViewState()

    return html.Div([

        # Scroll progress
        html.Div(html.Div(id='progress-bar', style={'width': '0%'}), className='progress-track'),

        # Client state
        dcc.Store(id='viewport-metrics'),
        dcc.Store(id='revealed-chapters', data=[]),
        dcc.Store(id='resize-state', data=ResizeDebounce().to_dict()),
        dcc.Store(id='chart-width', data=CHART_MAX_WIDTH),
        dcc.Store(id='chart-1-target'),
        dcc.Store(id='skills-view', data=skills_view.to_dict()),
        dcc.Interval(id='viewport-clock', interval=SAMPLE_INTERVAL_MS),
        dcc.Interval(id='resize-timer', interval=RESIZE_TICK_MS, disabled=True),
        dcc.Interval(id='count-up', interval=COUNT_UP_TICK_MS, max_intervals=COUNT_UP_TICKS),

        dbc.Container([

            _chapter(
                'intro', APP_TITLE,
                "How artificial intelligence is reshaping roles, skills and pay.",
                html.Div([
                    _stat('0', 'Jobs Analyzed', value_id='total-jobs'),
                    _stat(f"{records['job_title'].nunique():,}", 'Roles'),
                    _stat(f"${median_salary/1000:.0f}K" if pd.notna(median_salary) else "n/a",
                          'Median Salary')
                ], style={'display': 'flex', 'gap': '10px'})
            ),

            _chapter(
                'ai-impact', "Which Roles Feel AI the Most?",
                "Weighted AI adoption per role: High = 3, Medium = 2, Low = 1.",
                html.Div(dcc.Graph(id='chart-1',
                                   figure=collapse_bars(create_ai_exposure_chart(records)),
                                   animate=True, config=GRAPH_CONFIG),
                         style=CARD_STYLE)
            ),

            _chapter(
                'skills', "The Skills in Demand",
                "How often each skill is required across all postings.",
                dbc.Button(skills_view.button_label, id='toggle-view', n_clicks=0,
                           color='primary', outline=True, size='sm', className='mb-3'),
                html.Div(dcc.Graph(id='chart-3', figure=create_skills_chart(records, skills_view),
                                   config=GRAPH_CONFIG),
                         style=CARD_STYLE)
            ),

            _chapter(
                'compensation', "Does AI Pay?",
                "Salary distribution by AI adoption level.",
                html.Div(dcc.Graph(id='chart-4', figure=create_compensation_chart(records),
                                   animate=True, config=GRAPH_CONFIG),
                         style=CARD_STYLE)
            ),

            _chapter(
                'explorer', "Career Explorer",
                "Pick a role to see its typical pay, outlook and requirements.",
                dcc.Dropdown(
                    id='job-select',
                    options=[{'label': title, 'value': title} for title in job_titles(records)],
                    placeholder='Select a job title...',
                    clearable=True,
                    className='mb-3'
                ),
                html.Div([
                    _detail('Average Salary', 'job-salary'),
                    _detail('Growth Projection', 'job-growth'),
                    _detail('AI Adoption', 'job-ai'),
                    _detail('Automation Risk', 'job-risk'),
                    html.H4('Top Skills', className='detail-heading'),
                    html.Div(id='job-skills', className='tag-list'),
                    html.H4('Top Locations', className='detail-heading'),
                    html.Div(id='job-locations', className='tag-list')
                ], id='job-details', className='hidden', style=CARD_STYLE)
            )

        ], fluid=False)

    ], className='page')


# ============================================
# CALLBACK HELPERS
# ============================================

def progress_style(metrics):
    if not metrics:
        return {'width': '0%'}
    progress = scroll_progress(metrics['scroll_y'], metrics['document_height'], metrics['viewport_height'])
    return {'width': f'{progress:.2f}%'}


def chapter_classes(chapter_ids, revealed):
    return [chapter_class(chapter_id['index'], revealed) for chapter_id in chapter_ids]


def handle_resize(trigger, metrics, state, now_ms=None):
    """
    Advance the resize debounce.

    Returns (state, timer disabled, chart width); values that do not change
    come back as dash.no_update. The timer keeps ticking while a width is
    pending and is switched off once it settles.
    """
    if now_ms is None:
        now_ms = time.time() * 1000
    debounce = ResizeDebounce.from_dict(state)

    if trigger == 'resize-timer':
        debounce, width = debounce.fire(now_ms)
        if width is not None:
            logger.debug("Viewport settled at %dpx, redrawing charts", width)
            return debounce.to_dict(), True, chart_width(width)
        if debounce.pending is not None:
            return debounce.to_dict(), dash.no_update, dash.no_update
        return debounce.to_dict(), True, dash.no_update

    debounce, armed = debounce.observe((metrics or {}).get('viewport_width'), now_ms)
    if not armed:
        return debounce.to_dict(), dash.no_update, dash.no_update
    return debounce.to_dict(), False, dash.no_update


# ============================================
# CALLBACKS
# ============================================

def register_callbacks(app, records):
    total_jobs = len(records)

    app.clientside_callback(
        VIEWPORT_SAMPLER_JS,
        Output('viewport-metrics', 'data'),
        Input('viewport-clock', 'n_intervals'),
        State('viewport-metrics', 'data')
    )

    @app.callback(
        Output('progress-bar', 'style'),
        Input('viewport-metrics', 'data')
    )
    def update_progress(metrics):
        return progress_style(metrics)

    @app.callback(
        Output('revealed-chapters', 'data'),
        Output({'type': 'chapter', 'index': ALL}, 'className'),
        Input('viewport-metrics', 'data'),
        State('revealed-chapters', 'data'),
        State({'type': 'chapter', 'index': ALL}, 'id')
    )
    def update_reveal(metrics, revealed, chapter_ids):
        revealed = reveal_chapters(revealed, (metrics or {}).get('chapters'))
        return revealed, chapter_classes(chapter_ids, revealed)

    @app.callback(
        Output('resize-state', 'data'),
        Output('resize-timer', 'disabled'),
        Output('chart-width', 'data'),
        Input('viewport-metrics', 'data'),
        Input('resize-timer', 'n_intervals'),
        State('resize-state', 'data'),
        prevent_initial_call=True
    )
    def debounce_resize(metrics, timer_ticks, state):
        return handle_resize(ctx.triggered_id, metrics, state)

    # Bars first drop to zero, then grow back in from the stored target
    @app.callback(
        Output('chart-1', 'figure'),
        Output('chart-1-target', 'data'),
        Output('chart-4', 'figure'),
        Input('chart-width', 'data'),
        prevent_initial_call=True
    )
    def redraw_charts(width):
        exposure = create_ai_exposure_chart(records, width)
        return collapse_bars(exposure), exposure, create_compensation_chart(records, width)

    @app.callback(
        Output('chart-1', 'figure', allow_duplicate=True),
        Input('chart-1-target', 'data'),
        prevent_initial_call=True
    )
    def grow_ai_chart(figure):
        return figure

    @app.callback(
        Output('skills-view', 'data'),
        Input('toggle-view', 'n_clicks'),
        State('skills-view', 'data'),
        prevent_initial_call=True
    )
    def toggle_skills_view(n_clicks, view):
        return SkillsViewState.from_dict(view).toggle().to_dict()

    @app.callback(
        Output('chart-3', 'figure'),
        Output('toggle-view', 'children'),
        Input('chart-width', 'data'),
        Input('skills-view', 'data'),
        prevent_initial_call=True
    )
    def redraw_skills(width, view):
        view_state = SkillsViewState.from_dict(view)
        return create_skills_chart(records, view_state, width), view_state.button_label

    @app.callback(
        JOB_DETAIL_OUTPUTS,
        Input('job-select', 'value')
    )
    def update_job_details(title):
        return job_details_outputs(records, title)

    @app.callback(
        Output('total-jobs', 'children'),
        Input('count-up', 'n_intervals')
    )
    def count_up(n_intervals):
        return f"{count_up_value(total_jobs, (n_intervals or 0) * COUNT_UP_TICK_MS):,}"


# ============================================
# DASH APP
# ============================================

def create_app(records):
    """Build the Dash app around an already loaded, validated record set."""
    app = dash.Dash(__name__, external_stylesheets=[
        dbc.themes.DARKLY,
        "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;600;700&display=swap"
    ])
    app.title = APP_TITLE
    app.layout = build_layout(records)
    register_callbacks(app, records)
    logger.info("✓ Dashboard ready (%s jobs)", f"{len(records):,}")
    return app

"""
Web application for the Roller Racer Simulation

Interactive dashboard to drive the simulator and visualize its telemetry.
"""

import logging
from typing import Any, Dict, List

import dash
from dash import dcc, html, Input, Output, State
from dash.exceptions import PreventUpdate
import plotly.express as px
import plotly.graph_objs as go

from racer import RacerError, run_steer_sweep

LOGGER = logging.getLogger(__name__)


def _labeled_input(label: str, input_id: str, value: Any, width: str = "15%", **kwargs: Any) -> html.Div:
    return html.Div([
        html.Label(label, style={'fontWeight': 'bold', 'marginBottom': '5px'}),
        dcc.Input(id=input_id, value=value, style={'width': '100%', 'padding': '8px'}, **kwargs),
    ], style={'width': width, 'display': 'inline-block', 'marginRight': '20px'})


# Initialize Dash app
app = dash.Dash(__name__)
app.title = "Roller Racer Simulation"

# Define app layout
app.layout = html.Div([
    html.Div([
        html.H1("Roller Racer Simulation",
                style={'textAlign': 'center', 'marginBottom': '30px'}),

        html.Div([
            _labeled_input("Steer Angles (deg, comma-separated):", 'steer-input', '0,10,20',
                           width='25%', type='text'),
            _labeled_input("Initial Speed (m/s):", 'speed-input', 2.0,
                           type='number', min=0.0, max=20.0, step=0.1),
            _labeled_input("Duration (s):", 'duration-input', 10.0,
                           type='number', min=1.0, max=60.0, step=0.5),
            _labeled_input("Brake Command (0-1):", 'brake-input', 0.0,
                           type='number', min=0.0, max=1.0, step=0.05),
            _labeled_input("Brake Onset (s):", 'onset-input', 5.0,
                           type='number', min=0.0, step=0.5),
            html.Div([
                html.Label("Integrator:", style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Dropdown(
                    id='method-input',
                    options=[
                        {'label': 'RK4', 'value': 'rk4'},
                        {'label': 'RK2', 'value': 'rk2'},
                        {'label': 'Euler', 'value': 'euler'},
                    ],
                    value='rk4',
                    clearable=False,
                ),
            ], style={'width': '10%', 'display': 'inline-block', 'marginRight': '20px'}),

            html.Button('Run Simulation', id='run-button',
                        style={'width': '15%', 'padding': '10px', 'fontSize': '16px',
                               'backgroundColor': '#4CAF50', 'color': 'white',
                               'border': 'none', 'borderRadius': '5px', 'cursor': 'pointer'})
        ], style={'marginBottom': '30px', 'padding': '20px', 'backgroundColor': '#f5f5f5',
                  'borderRadius': '10px'}),

        html.Div(id='status-message', style={'marginBottom': '20px', 'fontSize': '14px'}),

        dcc.Loading(
            id="loading",
            type="default",
            children=[
                html.Div(id='results-container')
            ]
        )
    ], style={'maxWidth': '1400px', 'margin': '0 auto', 'padding': '20px'})
])


@app.callback(
    [Output("results-container", "children"), Output("status-message", "children")],
    [Input("run-button", "n_clicks")],
    [
        State("steer-input", "value"),
        State("speed-input", "value"),
        State("duration-input", "value"),
        State("brake-input", "value"),
        State("onset-input", "value"),
        State("method-input", "value"),
    ],
)
def update_results(
    n_clicks: int | None,
    steer_str: str,
    initial_speed: float,
    duration: float,
    brake_command: float,
    brake_onset: float,
    method: str,
) -> tuple[Any, Any]:
    """Run simulation and update results"""
    if n_clicks is None:
        raise PreventUpdate

    if not steer_str:
        return [], html.Div("Error: Enter at least one steer angle.", style={"color": "red"})

    try:
        steer_angles = sorted(float(s.strip()) for s in steer_str.split(","))
    except ValueError:
        return [], html.Div("Error: Steer angles must be numbers.", style={"color": "red"})

    if duration is None or duration < 1 or duration > 60:
        return [], html.Div(
            "Error: Duration must be between 1 and 60 seconds.",
            style={"color": "red"},
        )

    try:
        results = run_steer_sweep(
            steer_angles,
            duration=duration,
            initial_speed=initial_speed or 0.0,
            method=method,
            brake_command=brake_command or 0.0,
            brake_onset=brake_onset or 0.0,
        )
    except (RacerError, ValueError) as e:
        LOGGER.exception("Simulation failed")
        return [], html.Div(f"Error: {e}", style={"color": "red"})

    status_msg = html.Div(
        f"Simulation complete! Ran {len(steer_angles)} steer angles.",
        style={"color": "green"},
    )
    return create_results_layout(results, steer_angles), status_msg


def _time_series(
    results: Dict[float, Dict[str, Any]], angles: List[float], column: int, title: str, y_title: str
) -> go.Figure:
    fig = go.Figure()
    colors = px.colors.qualitative.Set1
    for i, angle in enumerate(angles):
        fig.add_trace(
            go.Scatter(
                x=results[angle]["time"],
                y=results[angle]["telemetry"][:, column],
                mode="lines",
                name=f"{angle}°",
                line=dict(color=colors[i % len(colors)], width=2),
            )
        )
    fig.update_layout(
        title=title,
        xaxis_title="Time (s)",
        yaxis_title=y_title,
        hovermode="closest",
        height=400,
        template="plotly_white",
    )
    return fig


def create_results_layout(
    results: Dict[float, Dict[str, Any]], angles: List[float]
) -> html.Div:
    """Create the results visualization layout"""
    colors = px.colors.qualitative.Set1

    # 1. Trajectory of the center of mass
    fig1 = go.Figure()
    for i, angle in enumerate(angles):
        state = results[angle]["state"]
        fig1.add_trace(
            go.Scatter(
                x=state[:, 0],
                y=state[:, 2],
                mode="lines",
                name=f"{angle}°",
                line=dict(color=colors[i % len(colors)], width=2),
                hovertemplate=f"Steer: {angle}°<br>x: %{{x:.2f}}m<br>z: %{{y:.2f}}m<extra></extra>",
            )
        )
    fig1.update_layout(
        title="Center of Mass Trajectory",
        xaxis_title="x (m)",
        yaxis_title="z (m)",
        yaxis=dict(scaleanchor="x", scaleratio=1),
        height=500,
        template="plotly_white",
    )

    fig2 = _time_series(results, angles, 0, "Speed Over Time", "Speed (m/s)")
    fig3 = _time_series(results, angles, 1, "Kinetic Energy Over Time", "Energy (J)")
    fig4 = _time_series(results, angles, 2, "Front Slip Rate", "Slip Rate (m/s)")
    fig5 = _time_series(results, angles, 4, "Front Friction Factor", "Required μ")

    table_rows = [
        html.Tr([
            html.Th("Steer (deg)"),
            html.Th("Path Length (m)"),
            html.Th("Final Speed (m/s)"),
            html.Th("Turn Radius (m)"),
            html.Th("Energy Lost (%)"),
            html.Th("Max Friction Factor"),
            html.Th("Sliding"),
        ])
    ]
    for angle in angles:
        analysis = results[angle]["analysis"]
        sliding = analysis["sliding_fraction"] > 0
        table_rows.append(
            html.Tr([
                html.Td(angle),
                html.Td(f"{analysis['path_length']:.2f}"),
                html.Td(f"{analysis['final_speed']:.2f}"),
                html.Td(f"{analysis['median_turn_radius']:.2f}"),
                html.Td(f"{analysis['energy_lost_fraction'] * 100:.1f}"),
                html.Td(f"{analysis['max_friction_factor']:.3f}"),
                html.Td(
                    "Yes" if sliding else "No",
                    style={"color": "red" if sliding else "green", "fontWeight": "bold"},
                ),
            ])
        )

    return html.Div([
        html.H2("Simulation Results", style={"marginTop": "30px", "marginBottom": "20px"}),
        html.Div([
            html.H3("Summary Table", style={"marginBottom": "15px"}),
            html.Table(
                table_rows,
                style={
                    "width": "100%",
                    "borderCollapse": "collapse",
                    "marginBottom": "30px",
                    "fontSize": "14px",
                },
            ),
        ], style={"marginBottom": "30px"}),
        html.Div([
            html.Div([dcc.Graph(figure=fig1)], style={"marginBottom": "30px"}),
            html.Div([
                html.Div(
                    [dcc.Graph(figure=fig2)],
                    style={"width": "48%", "display": "inline-block", "marginRight": "2%"},
                ),
                html.Div(
                    [dcc.Graph(figure=fig3)],
                    style={"width": "48%", "display": "inline-block"},
                ),
            ], style={"marginBottom": "30px"}),
            html.Div([
                html.Div(
                    [dcc.Graph(figure=fig4)],
                    style={"width": "48%", "display": "inline-block", "marginRight": "2%"},
                ),
                html.Div(
                    [dcc.Graph(figure=fig5)],
                    style={"width": "48%", "display": "inline-block"},
                ),
            ], style={"marginBottom": "30px"}),
        ]),
    ])


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    app.run(debug=True, port=8050)

from __future__ import annotations

import plotly.graph_objects as go


def apply_common_plot_style(fig, title, theme, show_xgrid=False, show_ygrid=True):
    fig.update_layout(
        title=title,
        title_font=dict(color=theme["text_main"], size=16),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=theme["text_main"]),
        margin=dict(l=40, r=20, t=40, b=30),
        xaxis=dict(
            showgrid=show_xgrid,
            gridcolor=theme["plot_grid"],
            tickfont=dict(color=theme["text_soft"]),
            zeroline=False,
            showline=True,
            linecolor=theme["border"],
        ),
        yaxis=dict(
            showgrid=show_ygrid,
            gridcolor=theme["plot_grid"],
            zeroline=False,
            tickfont=dict(color=theme["text_soft"]),
            showline=True,
            linecolor=theme["border"],
        ),
    )
    return fig


def payments_by_due_date_chart(grouped, currency_symbol, theme, height=280):
    fig = go.Figure(
        data=[
            go.Bar(name="Paid", x=grouped["dueDate"], y=grouped["paid"], marker_color="#8FB6D9"),
            go.Bar(name="Outstanding", x=grouped["dueDate"], y=grouped["outstanding"], marker_color="#D95252"),
        ]
    )
    apply_common_plot_style(fig, "Payments by due date", theme)
    fig.update_layout(barmode="stack", height=height, legend=dict(orientation="h", y=-0.2))
    fig.update_yaxes(tickprefix=currency_symbol)
    return fig

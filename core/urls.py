"""URL configuration for the dashboard API views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("api/format/token-amount/", views.format_token_amount_api, name="format_token_amount"),
    path("api/format/usd/", views.format_usd_api, name="format_usd"),
    path("api/charts/pie/", views.pie_chart_api, name="pie_chart"),
    path("api/charts/pie.svg", views.pie_chart_svg, name="pie_chart_svg"),
    path("api/charts/borrow-graph/", views.borrow_graph_api, name="borrow_graph"),
    path("api/health/", views.health_api, name="health"),
]

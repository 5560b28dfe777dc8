"""Flask application: the weather proxy endpoint and the dashboard page."""
import logging
from typing import Optional

from flask import Flask, Response, jsonify, render_template, request

from config import Config
from dashboard import Dashboard
from geolocation import BrowserLocationReport
from layout import build_view, clamp_percentage
from proxy import ProviderFactory, handle_weather_request
from proxy_client import LocalProxyClient, WeatherClient
from ring_canvas import render_ring_png


def create_app(
    config: Config,
    client: Optional[WeatherClient] = None,
    provider_factory: Optional[ProviderFactory] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        config: Server configuration (read-only once the app exists)
        client: How the dashboard reaches the proxy; defaults to in-process
        provider_factory: Upstream provider for the proxy endpoint
    """
    app = Flask(__name__, template_folder="templates")
    app.config["WEATHER_CONFIG"] = config
    weather_client = client or LocalProxyClient(config, provider_factory)

    @app.get("/api/weather")
    def weather():
        payload, status = handle_weather_request(request.args, config, provider_factory)
        return jsonify(payload), status

    @app.route("/")
    def index():
        city = request.args.get("city", "").strip()
        report = BrowserLocationReport.from_args(request.args)
        dashboard = Dashboard(weather_client)

        if report.is_pending:
            if city:
                dashboard.skip_location_resolution()
        else:
            # A city search keeps the earlier location outcome but does not refetch it
            dashboard.resolve_location(report.as_source(), fetch_on_success=not city)

        if city:
            dashboard.fetch_by_city(city)

        view = build_view(dashboard.state)
        return render_template(
            "dashboard.html",
            city=city,
            resolve_in_browser=report.is_pending and not city,
            location_args=report.query_args(),
            **view,
        )

    @app.get("/temperature-ring.png")
    def temperature_ring():
        raw = request.args.get("percentage", "")
        try:
            percentage = clamp_percentage(int(raw))
        except ValueError:
            return jsonify({"message": "percentage must be an integer"}), 400
        return Response(render_ring_png(percentage), mimetype="image/png")

    logging.info("Weather dashboard app created (%r)", config)
    return app

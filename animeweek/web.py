from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request

from animeweek.client import JikanClient
from animeweek.config import Settings, configure_logging
from animeweek.errors import AnimeWeekError, ValidationError
from animeweek.models import schedule_to_dict
from animeweek.service import ScheduleService

logger = logging.getLogger(__name__)


def build_service(settings: Settings) -> ScheduleService:
    client = JikanClient(
        settings.base_url,
        max_retries=settings.max_retries,
        retry_delay_ms=settings.retry_delay_ms,
        timeout=settings.request_timeout,
    )
    return ScheduleService(client)


def create_app(settings: Optional[Settings] = None, service: Optional[ScheduleService] = None) -> Flask:
    settings = settings or Settings.from_env()
    service = service or build_service(settings)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.extensions["animeweek"] = service

    def failure(message: str, exc: Exception):
        # Upstream detail stays in the log, never in the response.
        if isinstance(exc, AnimeWeekError):
            logger.error("%s: %s", message, exc)
        else:
            logger.exception(message)
        return jsonify({"message": message}), 500

    @app.route("/api/schedule")
    def schedule():
        try:
            return jsonify({"schedule": schedule_to_dict(service.get_current_schedule())})
        except Exception as exc:
            return failure("Failed to fetch anime schedule", exc)

    @app.route("/api/schedule/<day>")
    def schedule_day(day):
        try:
            animes = service.get_current_day(day)
            return jsonify({"animes": [record.to_dict() for record in animes]})
        except ValidationError as exc:
            return jsonify({"message": str(exc)}), 400
        except Exception as exc:
            return failure("Failed to fetch day schedule", exc)

    @app.route("/api/anime/<anime_id>")
    def anime_detail(anime_id):
        try:
            return jsonify(service.get_anime_by_id(anime_id))
        except ValidationError as exc:
            return jsonify({"message": str(exc)}), 400
        except Exception as exc:
            return failure("Failed to fetch anime details", exc)

    @app.route("/api/seasons/current")
    def current_season():
        current = service.current_season()
        return jsonify({"season": current.season, "year": current.year})

    @app.route("/api/seasons/<year>/<season>")
    def season_schedule(year, season):
        try:
            return jsonify(service.get_season_schedule(year, season).to_dict())
        except ValidationError as exc:
            return jsonify({"message": str(exc)}), 400
        except Exception as exc:
            return failure("Failed to fetch seasonal schedule", exc)

    @app.route("/api/seasons/<year>/<season>/<day>")
    def season_day(year, season, day):
        try:
            return jsonify(service.get_season_day(year, season, day).to_dict())
        except ValidationError as exc:
            return jsonify({"message": str(exc)}), 400
        except Exception as exc:
            return failure("Failed to fetch seasonal day schedule", exc)

    @app.route("/api/search")
    def search():
        try:
            return jsonify(service.search(request.args.get("q", "")))
        except ValidationError as exc:
            return jsonify({"data": [], "message": str(exc)}), 400
        except Exception:
            logger.exception("Error searching anime")
            return jsonify({"data": [], "message": "Failed to search anime"}), 500

    @app.route("/api/popular")
    def popular():
        try:
            return jsonify(service.get_popular(request.args.get("season"), request.args.get("year")))
        except ValidationError as exc:
            return jsonify({"message": str(exc)}), 400
        except Exception:
            logger.exception("Error fetching popular anime")
            return jsonify({"data": [], "message": "Failed to fetch popular anime"}), 500

    return app


def run() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Server running on http://%s:%s", settings.host, settings.port)
    app.run(debug=settings.debug, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

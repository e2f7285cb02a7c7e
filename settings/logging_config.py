from __future__ import annotations

import logging
from logging.config import dictConfig


def configure_logging(level: int | str = logging.INFO) -> None:
	dictConfig(
		{
			"version": 1,
			"disable_existing_loggers": False,
			"formatters": {
				"standard": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
				"json": {"()": "warrant.json_logger.JsonFormatter"},
			},
			"handlers": {
				"console": {
					"class": "logging.StreamHandler",
					"formatter": "standard",
					"level": level,
				},
				"json_console": {
					"class": "logging.StreamHandler",
					"formatter": "json",
					"stream": "ext://sys.stderr",
					"level": level,
				},
			},
			"loggers": {
				"": {"handlers": ["console"], "level": level},
				"uvicorn": {"handlers": ["console"], "level": level, "propagate": False},
				# parsing pipeline and extractor events (warrant.json_logger)
				"warrant": {"handlers": ["json_console"], "level": level, "propagate": False},
			},
		}
	)

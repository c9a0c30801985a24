import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from cinelog_api.core.config import Settings


def init_sentry(cfg: Settings) -> bool:
    """Enable Sentry when a DSN is configured; return whether it is on."""
    if not cfg.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=cfg.sentry_dsn,
        environment=cfg.env,
        integrations=[
            # errors only; breadcrumbs from INFO
            LoggingIntegration(level=logging.INFO,
                               event_level=logging.ERROR),
            FastApiIntegration(),
        ],
        traces_sample_rate=cfg.sentry_traces_sample_rate,
        send_default_pii=False,
    )
    return True

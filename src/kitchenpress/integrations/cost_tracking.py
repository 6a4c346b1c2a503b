"""API call cost tracking shared by the AI clients."""

import sqlite3
from datetime import datetime
from typing import Optional

from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.utils.date_utils import now_utc, to_db_timestamp
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)


def track_api_call(
    db: Optional[DatabaseConnection],
    run_id: str,
    module: str,
    model: str,
    request_type: str,
    input_tokens: int,
    output_tokens: int,
    cost: float,
    success: bool,
    started_at: datetime,
    error_message: Optional[str] = None,
) -> None:
    """Record an API call in the api_calls table.

    Tracking failures are logged, never raised.

    Args:
        db: Database connection, or None to skip tracking.
        run_id: Service run identifier.
        module: Module making the call (e.g. "blog", "dedup").
        model: Provider-prefixed model name.
        request_type: Type of request (e.g. "completion", "embedding").
        input_tokens: Input tokens used.
        output_tokens: Output tokens generated.
        cost: Cost in USD.
        success: Whether the call succeeded.
        started_at: When the call started.
        error_message: Error message if failed.
    """
    if db is None:
        return

    try:
        db.execute(
            """
            INSERT INTO api_calls (
                run_id, module, model, request_type,
                input_tokens, output_tokens, total_tokens, cost,
                success, error_message, created_at, completed_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                run_id,
                module,
                model,
                request_type,
                input_tokens,
                output_tokens,
                input_tokens + output_tokens,
                cost,
                success,
                error_message,
                to_db_timestamp(started_at),
                to_db_timestamp(now_utc()),
            ),
        )
        db.commit()
    except sqlite3.Error as e:
        logger.error("failed_to_track_api_call", error=str(e))


def daily_cost(db: DatabaseConnection) -> float:
    """Total tracked cost for the current UTC day."""
    cursor = db.execute(
        """
        SELECT SUM(cost) AS total_cost
        FROM api_calls
        WHERE substr(created_at, 1, 10) = ?
        """,
        (now_utc().date().isoformat(),),
    )
    row = cursor.fetchone()
    return float(row["total_cost"] or 0.0)

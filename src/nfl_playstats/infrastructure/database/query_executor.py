# src/nfl_playstats/infrastructure/database/query_executor.py

import logging
from typing import Any, Dict, List, Optional
import requests

from ...config.constants import SUPABASE_PAGE_SIZE
from ...domain.interfaces.database import (
    StoreConnectionInterface, DatabaseError
)

logger = logging.getLogger(__name__)

UPSERT_BATCH_SIZE = 500


def _format_value(value: Any) -> str:
    # PostgREST expects lowercase booleans
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class SupabaseQueryExecutor:
    """PostgREST query executor for the play store."""

    def __init__(self, connection: StoreConnectionInterface, timeout: int = 30):
        self._connection = connection
        self._timeout = timeout

    def _endpoint(self, table: str) -> tuple:
        return self._connection.rest_url(table), dict(self._connection.request_headers())

    def _build_params(self, columns: str, filters: Optional[Dict[str, Any]],
                      order: Optional[str]) -> Dict[str, str]:
        """Equality filters keyed by column (embedded columns as ``table.column``)."""
        params = {'select': columns}
        for column, value in (filters or {}).items():
            if value is None:
                continue
            params[column] = f"eq.{_format_value(value)}"
        if order:
            params['order'] = order
        return params

    def select(self, table: str, columns: str = '*', filters: Optional[Dict[str, Any]] = None,
               order: Optional[str] = None, limit: Optional[int] = None) -> List[Dict]:
        """Single-request SELECT."""
        url, headers = self._endpoint(table)
        params = self._build_params(columns, filters, order)
        if limit is not None:
            params['limit'] = str(limit)

        try:
            response = requests.get(url, headers=headers, params=params, timeout=self._timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            logger.error(f"Query on {table} failed: {e}")
            raise DatabaseError(f"Query on {table} failed: {e}", table, 'select')

    def select_all(self, table: str, columns: str = '*', filters: Optional[Dict[str, Any]] = None,
                   order: Optional[str] = None) -> List[Dict]:
        """Paginated SELECT that retrieves every matching row."""
        url, headers = self._endpoint(table)
        base_params = self._build_params(columns, filters, order)

        all_results = []
        offset = 0

        while True:
            request_headers = headers.copy()
            request_headers['Range'] = f'{offset}-{offset + SUPABASE_PAGE_SIZE - 1}'

            logger.debug(f"Fetching {table} rows {offset} to {offset + SUPABASE_PAGE_SIZE - 1}")

            try:
                response = requests.get(url, headers=request_headers, params=base_params,
                                        timeout=self._timeout)
                response.raise_for_status()
                batch_results = response.json()
            except requests.RequestException as e:
                logger.error(f"Paginated query on {table} failed at offset {offset}: {e}")
                raise DatabaseError(f"Query on {table} failed at offset {offset}: {e}", table, 'select')

            if not batch_results:
                break

            all_results.extend(batch_results)

            # A short page means the end of the result set
            if len(batch_results) < SUPABASE_PAGE_SIZE:
                break

            offset += len(batch_results)

        logger.info(f"Paginated query on {table} complete: retrieved {len(all_results)} total rows")
        return all_results

    def upsert(self, table: str, rows: List[Dict[str, Any]], on_conflict: str) -> int:
        """Insert or merge rows on the conflict key; returns rows sent."""
        if not rows:
            return 0

        url, headers = self._endpoint(table)
        headers['Prefer'] = 'resolution=merge-duplicates,return=minimal'
        params = {'on_conflict': on_conflict}

        written = 0
        for start in range(0, len(rows), UPSERT_BATCH_SIZE):
            batch = rows[start:start + UPSERT_BATCH_SIZE]
            try:
                response = requests.post(url, headers=headers, params=params, json=batch,
                                         timeout=self._timeout)
                if response.status_code not in (200, 201, 204):
                    logger.error(f"Supabase upsert failed: {response.status_code} - {response.text}")
                response.raise_for_status()
            except requests.RequestException as e:
                raise DatabaseError(
                    f"Upsert into {table} failed after {written} rows: {e}", table, 'upsert'
                )
            written += len(batch)
            logger.debug(f"Upserted {written}/{len(rows)} rows into {table}")

        return written

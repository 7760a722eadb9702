import os
import asyncio
import pandas as pd
import csv
from collections import Counter
from typing import Dict, List, Tuple
import sys
from loguru import logger

from halalmatch.models import MatchSource, MatchVerdict, MerchantRecord
from halalmatch.matchers.halal_matcher import HalalMatcher
from halalmatch.config import INPUT_CSV, OUTPUT_CSV, BATCH_SIZE, LOG_LEVEL
from halalmatch.clients import RegisterClient

OUTPUT_HEADER = ["id", "name", "address", "postalCode", "isHalal", "halalSource", "certNumber"]


def load_merchants_from_csv(file_path: str, nrows: int = None) -> List[MerchantRecord]:
    """Load merchants from CSV and convert to MerchantRecord objects."""
    # Postal codes and ids stay strings so leading zeros survive
    df = pd.read_csv(file_path, nrows=nrows, dtype={"postalCode": str, "id": str})
    records = []
    for _, row in df.iterrows():
        def safe_get(col):
            if col not in row.index:
                return None
            val = row[col]
            if pd.isna(val):
                return None
            return val

        name = str(row["name"]) if pd.notna(row["name"]) else ""
        postal = safe_get("postalCode")
        postal = str(postal).strip().zfill(6) if postal is not None else ""

        latitude = None
        longitude = None
        if safe_get("LAT") is not None and safe_get("LON") is not None:
            try:
                latitude = float(row["LAT"])
                longitude = float(row["LON"])
            except (ValueError, TypeError):
                latitude = longitude = None

        records.append(MerchantRecord(
            name=name,
            postal_code=postal,
            id=safe_get("id"),
            address=safe_get("address"),
            latitude=latitude,
            longitude=longitude,
        ))
    return records


def batch_iter(records: List[MerchantRecord], batch_size: int):
    """
    Yield index and MerchantRecord slices of size `batch_size` for batched processing.
    """
    n = len(records)
    for i in range(0, n, batch_size):
        yield i, records[i:i+batch_size]


async def enrich_merchants(
    matcher: HalalMatcher,
    records: List[MerchantRecord],
    batch_size: int = BATCH_SIZE,
) -> List[Tuple[MerchantRecord, MatchVerdict]]:
    """
    Attach a halal verdict to every merchant, batch by batch, on one register snapshot.

    Args:
        matcher (HalalMatcher): Matcher shared by all batches.
        records (List[MerchantRecord]): Merchants to enrich.
        batch_size (int): Records per batch.

    Returns:
        List[Tuple[MerchantRecord, MatchVerdict]]: Records paired with their verdicts, input order.
    """
    enriched = []
    total = len(records)
    for start_idx, batch_records in batch_iter(records, batch_size):
        logger.debug(f"Processing rows {start_idx}..{start_idx + len(batch_records) - 1} of {total}")
        verdicts = await matcher.match_many(batch_records)
        enriched.extend(zip(batch_records, verdicts))
    return enriched


def write_enriched_csv(output_path: str, rows: List[Tuple[MerchantRecord, MatchVerdict]]):
    """Write enriched merchants to `output_path`, replacing any existing file."""
    if os.path.exists(output_path):
        os.remove(output_path)
    with open(output_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(OUTPUT_HEADER)
        for record, verdict in rows:
            writer.writerow([
                record.id or "",
                record.name,
                record.address or "",
                record.postal_code,
                verdict.is_halal,
                verdict.source.value,
                verdict.certificate_number or "",
            ])


def summarize(verdicts: List[MatchVerdict]) -> Dict[str, int]:
    """Count verdicts per source, plus the total number of halal merchants."""
    counts = Counter(verdict.source for verdict in verdicts)
    summary = {source.value: counts.get(source, 0) for source in MatchSource}
    summary["halal_total"] = sum(1 for verdict in verdicts if verdict.is_halal)
    return summary


async def main():
    """
    Orchestrate the batch enrichment run.

    - Loads the merchant directory from CSV.
    - Checks every merchant against the halal register in batches.
    - Writes the enriched directory and logs a per-source summary.
    """
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    merchants = load_merchants_from_csv(INPUT_CSV)
    logger.info(f"Loaded {len(merchants)} merchants from {INPUT_CSV}")

    client = RegisterClient()
    try:
        matcher = HalalMatcher(client)
        rows = await enrich_merchants(matcher, merchants)
        write_enriched_csv(OUTPUT_CSV, rows)
    finally:
        await client.close()

    summary = summarize([verdict for _, verdict in rows])
    logger.info(f"Halal certified: {summary['halal_total']} of {len(rows)}")
    for source in MatchSource:
        logger.info(f"  {source.value}: {summary[source.value]}")


if __name__ == "__main__":
    asyncio.run(main())

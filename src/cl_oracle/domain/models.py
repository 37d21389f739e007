"""Domain models for cl_oracle: pure dataclasses, fetched fresh and never persisted."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OracleReading:
    sequence_id: int             # round id reported as current
    raw_value: int               # signed; non-positive means feed malfunction
    precision: int               # fractional digits raw_value is expressed in
    observed_at: int             # unix seconds the answer was produced
    answered_in_sequence: int    # round the answer was actually computed in

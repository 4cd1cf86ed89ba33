"""
Column names shared by the extract, transform and load steps.
"""

# record axis codes
ID_COLUMN   = "id"
FLAG_COLUMN = "opioid"

# long-form reshape
NAME_COLUMN  = "name"
VALUE_COLUMN = "value"

# fluview observations
REGION_COLUMN  = "region"
EPIWEEK_COLUMN = "epiweek"

def observation_columns(metric: str) -> list[str]:
    return [REGION_COLUMN, EPIWEEK_COLUMN, metric]

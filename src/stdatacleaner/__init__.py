from .stcleaner import QUALITY_BUCKETS, STDataCleaner

__all__ = ["QUALITY_BUCKETS", "STDataCleaner"]

from .models import PriceRecord, CryptoStatistics, NormalizedPriceRange
from .store import PriceSeriesStore
from .statistics import compute_statistics
from .ranking import normalized_range, rank_all
from .date_filter import peak_on_date

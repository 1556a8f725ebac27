from datetime import date

BENCHMARK_TICKER = "^GSPC"
BENCHMARK_NAME = "S&P 500"

DATA_SOURCE = "Yahoo Finance"
HISTORY_START = date(1950, 1, 1)
RETURN_DECIMALS = 2
FETCH_CONCURRENCY = 3

MAX_CHART_POINTS = 100
DENSE_CHART_THRESHOLD = 50

DEFAULT_STARTING_AMOUNT = 10000.0
DEFAULT_MONTHLY_CONTRIBUTION = 500.0
DEFAULT_START_YEAR = 2020

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Instruments offered for comparison against the benchmark.
STOCK_CATALOG = (
    # Major Tech
    ("AAPL", "Apple Inc."),
    ("MSFT", "Microsoft Corporation"),
    ("GOOGL", "Alphabet Inc."),
    ("AMZN", "Amazon.com Inc."),
    ("META", "Meta Platforms Inc."),
    ("NVDA", "NVIDIA Corporation"),
    ("TSLA", "Tesla Inc."),
    # Finance
    ("JPM", "JPMorgan Chase & Co."),
    ("BAC", "Bank of America Corp."),
    ("WFC", "Wells Fargo & Company"),
    ("GS", "Goldman Sachs Group Inc."),
    ("MS", "Morgan Stanley"),
    ("C", "Citigroup Inc."),
    ("TFC", "Truist Financial Corporation"),
    # Consumer & Retail
    ("WMT", "Walmart Inc."),
    ("HD", "Home Depot Inc."),
    ("COST", "Costco Wholesale Corporation"),
    ("NKE", "Nike Inc."),
    ("MCD", "McDonald's Corporation"),
    ("SBUX", "Starbucks Corporation"),
    # Healthcare & Pharma
    ("JNJ", "Johnson & Johnson"),
    ("UNH", "UnitedHealth Group Inc."),
    ("PFE", "Pfizer Inc."),
    ("ABBV", "AbbVie Inc."),
    ("TMO", "Thermo Fisher Scientific Inc."),
    # Industrials & Conglomerates
    ("BRK-B", "Berkshire Hathaway Inc."),
    ("BA", "Boeing Company"),
    ("CAT", "Caterpillar Inc."),
    ("GE", "General Electric Company"),
    # Telecommunications & Media
    ("T", "AT&T Inc."),
    ("VZ", "Verizon Communications Inc."),
    ("DIS", "Walt Disney Company"),
    ("NFLX", "Netflix Inc."),
    ("CMCSA", "Comcast Corporation"),
    # Energy
    ("XOM", "Exxon Mobil Corporation"),
    ("CVX", "Chevron Corporation"),
    # Payment & Financial Services
    ("V", "Visa Inc."),
    ("MA", "Mastercard Inc."),
    ("PYPL", "PayPal Holdings Inc."),
    # Semiconductors
    ("INTC", "Intel Corporation"),
    ("AMD", "Advanced Micro Devices Inc."),
    ("QCOM", "QUALCOMM Inc."),
    # Mutual Funds - Vanguard
    ("VFIAX", "Vanguard 500 Index Fund Admiral"),
    ("VTSAX", "Vanguard Total Stock Market Index Admiral"),
    ("VTIAX", "Vanguard Total Intl Stock Index Admiral"),
    ("VBTLX", "Vanguard Total Bond Market Index Admiral"),
    ("VWINX", "Vanguard Wellesley Income Fund"),
    ("VWELX", "Vanguard Wellington Fund"),
    ("VGENX", "Vanguard Energy Fund"),
    ("VGHCX", "Vanguard Health Care Fund"),
    # Mutual Funds - Fidelity
    ("FXAIX", "Fidelity 500 Index Fund"),
    ("FSKAX", "Fidelity Total Market Index Fund"),
    ("FTIHX", "Fidelity Total International Index Fund"),
    ("FXNAX", "Fidelity US Bond Index Fund"),
    ("FBGRX", "Fidelity Blue Chip Growth Fund"),
    ("FCNTX", "Fidelity Contrafund"),
    # Mutual Funds - Schwab
    ("SWPPX", "Schwab S&P 500 Index Fund"),
    ("SWTSX", "Schwab Total Stock Market Index Fund"),
    ("SWISX", "Schwab International Index Fund"),
    ("SWAGX", "Schwab US Aggregate Bond Index Fund"),
)

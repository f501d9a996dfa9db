"""Configuration for plot styling and parameters."""

# Figure sizes
STANDARD_FIGSIZE = (12, 6)
LARGE_FIGSIZE = (12, 8)
TALL_FIGSIZE = (12, 10)

# Colors
INDEX_COLOR = '#2c3e50'
WEALTH_COLORS = ['#3498db', '#e74c3c']  # Cash, Holdings
REGION_COLORS = {
    'North America': '#3498db',
    'Europe': '#2ecc71',
    'Asia': '#e67e22',
}
EVENT_COLORS = {
    'positive': 'green',
    'negative': 'red',
    'political': 'purple',
    'disaster': 'black',
    'neutral': 'gray',
}

# Transparency
STANDARD_ALPHA = 0.7
LIGHT_ALPHA = 0.3

# Line styles
STANDARD_LINEWIDTH = 2
THIN_LINEWIDTH = 1.0
EVENT_LINESTYLE = ':'

# Grid
GRID_ALPHA = 0.3

# Number of stocks drawn on the price chart
MAX_STOCKS_PLOTTED = 8

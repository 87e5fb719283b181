"""
Configuration file for the Walking Route Planner.
Contains all constants, parameters, and settings for the project.
"""

import os

from dotenv import load_dotenv

# Deployment-specific values can be overridden in a .env file
load_dotenv()

# Map defaults (Wrocław Rynek until the first pin is placed)
DEFAULT_CENTER = (51.1079, 17.0385)
DEFAULT_ZOOM = 13
MAP_TILE = 'OpenStreetMap'
MAP_HEIGHT = 600

# Geocoding (Nominatim via OSMnx)
GEOCODER_USER_AGENT = os.getenv('GEOCODER_USER_AGENT', 'walking-route-planner')
REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '10'))  # seconds
CACHE_DIR = 'data/cache'

# Directions
# 'osrm'  - remote OSRM /route service
# 'graph' - local OSM walking graph built with OSMnx
DIRECTIONS_BACKEND = os.getenv('DIRECTIONS_BACKEND', 'osrm')
OSRM_BASE_URL = os.getenv('OSRM_BASE_URL', 'https://routing.openstreetmap.de/routed-foot')
OSRM_PROFILE = os.getenv('OSRM_PROFILE', 'foot')

# Walking graph backend
OSM_NETWORK_TYPE = 'walk'  # Pedestrian network
GRAPH_ALTERNATIVES = 3     # k shortest paths per leg
GRAPH_BUFFER_M = 500       # extra radius around a leg when fetching the graph

# Walking speed used when a backend gives no duration
WALKING_SPEED_MPS = 1.4    # Average walking speed (m/s)

# Overlay style
ROUTE_COLOR = 'blue'
ROUTE_WEIGHT = 5
ROUTE_OPACITY = 0.8

# UI strings
ADD_TITLE = 'Add'
ADD_PLACEHOLDER = 'Enter address'
ERROR_TITLE = 'Error'
GEOCODING_ERROR_MESSAGE = 'Server unavailable. Try adding the address again.'
DIRECTIONS_ERROR_MESSAGE = 'Route unavailable.'

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

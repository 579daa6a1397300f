import os

HOST = os.environ.get('APARTMENT_FINDER_HOST', '127.0.0.1')
PORT = int(os.environ.get('APARTMENT_FINDER_PORT', '5001'))
THREADS = int(os.environ.get('APARTMENT_FINDER_THREADS', '4'))

LOG_LEVEL = os.environ.get('APARTMENT_FINDER_LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(threadName)s : %(message)s'

# Unset means a new random key (and logged-out sessions) on every start
SECRET_KEY = os.environ.get('APARTMENT_FINDER_SECRET_KEY') or os.urandom(24)

_seed = os.environ.get('APARTMENT_FINDER_SEED')
DATASET_SEED = int(_seed) if _seed not in (None, '') else None

SEARCH_FLEXIBILITY_DAYS = 2
MAX_API_FLEXIBILITY_DAYS = 14

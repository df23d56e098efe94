from .health import router as health_router
from .soil import router as soil_router
from .weather import router as weather_router
from .disease import router as disease_router

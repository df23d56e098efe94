from .soil_service import analyze_soil, evaluate_sample, classify_nutrient, MalformedInput
from .weather_service import get_weather_forecast
from .disease_service import assess_plant_health
from .http import get_http_client

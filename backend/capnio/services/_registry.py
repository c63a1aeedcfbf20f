"""Registry of canonical system variables and general sensor categories.

Sensor-type declarations map payload keys onto these variables; control
definitions and machine sensors refer to them by id.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SystemVariable:
    """A canonical sensor-reading name."""

    id: str
    label: str
    category: str | None = None


SENSOR_CATEGORY_REGISTRY: dict[str, str] = {
    "temperature": "Température",
    "humidity": "Humidité",
    "pressure": "Pression",
    "air_quality": "Qualité de l'air (CO2, VOC, PM)",
    "light": "Luminosité",
    "motion": "Mouvement",
    "power": "Alimentation/Batterie",
    "electrical": "Électrique (tension, courant)",
    "location": "Localisation/GPS",
    "level_flow": "Niveau/Débit",
    "vibration_sound": "Vibration/Son",
    "system": "Métriques système (CPU, mémoire, disque)",
    "multi_purpose": "Capteur Polyvalent",
    "generic_other": "Générique/Autre",
}


def _variables(*entries: tuple[str, str, str | None]) -> dict[str, SystemVariable]:
    return {var_id: SystemVariable(var_id, label, category) for var_id, label, category in entries}


SYSTEM_VARIABLE_REGISTRY: dict[str, SystemVariable] = _variables(
    ("temp", "Température", "temperature"),
    ("temp_four", "Température four", "temperature"),
    ("temp_caisson", "Température caisson", "temperature"),
    ("temp_srv", "Température serveur", "temperature"),
    ("hum", "Humidité", "humidity"),
    ("humidity", "Humidité relative", "humidity"),
    ("press", "Pression", "pressure"),
    ("pression_huile", "Pression d'huile", "pressure"),
    ("co2", "Niveau CO2", "air_quality"),
    ("voc", "Niveau VOC", "air_quality"),
    ("pm25", "PM2.5", "air_quality"),
    ("pm10", "PM10", "air_quality"),
    ("light", "Niveau de lumière", "light"),
    ("motion", "Mouvement", "motion"),
    ("battery_percent", "Niveau batterie %", "power"),
    ("battery_voltage", "Voltage batterie", "power"),
    ("tension", "Tension", "electrical"),
    ("courant", "Courant", "electrical"),
    ("rssi", "Force du signal RSSI", None),
    ("snr", "Rapport signal/bruit", None),
    ("gps_lat", "GPS latitude", "location"),
    ("gps_lon", "GPS longitude", "location"),
    ("gps_alt", "GPS altitude", "location"),
    ("water_level", "Niveau d'eau", "level_flow"),
    ("flow_rate", "Débit", "level_flow"),
    ("vibration", "Vibration", "vibration_sound"),
    ("sound_level", "Niveau sonore", "vibration_sound"),
    ("cpu_usage_percent", "Utilisation CPU %", "system"),
    ("mem_usage_percent", "Utilisation mémoire %", "system"),
    ("disk_free_gb", "Espace disque libre (Go)", "system"),
    ("count", "Compteur générique", None),
    ("switch_state", "État interrupteur (on/off)", None),
    ("analog_value", "Valeur analogique", None),
    ("digital_value", "Valeur numérique", None),
    ("text_value", "Valeur texte", None),
    ("timestamp", "Horodatage", None),
    ("error_code", "Code d'erreur", None),
    ("status_text", "Texte de statut", None),
    ("other", "Autre/Non catégorisé", None),
)


def get_system_variable(variable_id: str) -> SystemVariable | None:
    """Get a registered system variable."""
    return SYSTEM_VARIABLE_REGISTRY.get(variable_id)


def is_sensor_category(category_id: str) -> bool:
    return category_id in SENSOR_CATEGORY_REGISTRY

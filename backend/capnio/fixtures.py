"""Demo data: client site forest and admin catalog.

Loaded into an empty store on startup (see SEED_DEMO_DATA) and by the tests.
"""

from capnio.schemas.assets import ControlDefinition, Site
from capnio.schemas.catalog import MachineTypeInfo, SensorTypeInfo, ZoneTypeInfo

FRIDGE_CHECKLIST = [
    "Vérifier la fermeture correcte de la porte du réfrigérateur.",
    "Inspecter l'étanchéité des joints de porte.",
    "Confirmer que le thermostat est réglé à la bonne température.",
    "S'assurer que le condenseur est propre et non obstrué.",
]

# --- Control Definitions ---

CONTROL_DEFINITIONS = [
    {
        "id": "control-001",
        "name": "Contrôle Température Frigo",
        "applicableMachineTypes": ["Frigo", "Congélateur"],
        "requiredSensorCategories": ["Température"],
        "variablesUtilisees": ["temp"],
        "verificationFormula": (
            "sensor['temp'].value >= machine.params['seuil_min'] "
            "&& sensor['temp'].value <= machine.params['seuil_max']"
        ),
        "description": "Vérifie que la température du frigo reste dans les seuils définis.",
        "expectedParams": [
            {"id": "seuil_min", "label": "Seuil Température Minimum (°C)", "type": "number", "defaultValue": 0},
            {"id": "seuil_max", "label": "Seuil Température Maximum (°C)", "type": "number", "defaultValue": 5},
        ],
        "checklist": [
            "Vérifier que la porte du frigo est bien fermée et étanche.",
            "Nettoyer le condenseur de toute poussière ou obstruction.",
            "S'assurer que la ventilation autour du frigo n'est pas bloquée.",
        ],
    },
    {
        "id": "control-002",
        "name": "Contrôle Consommation Électrique Moteur",
        "applicableMachineTypes": ["Moteur Principal", "Pompe Hydraulique", "Compresseur", "HVAC"],
        "requiredSensorCategories": ["Tension", "Courant"],
        "variablesUtilisees": ["tension", "courant", "conso"],
        "calculationFormula": "conso = sensor['tension'].value * sensor['courant'].value",
        "verificationFormula": "conso <= machine.params['seuil_max_conso']",
        "description": "Calcule et vérifie la consommation électrique des moteurs.",
        "expectedParams": [
            {"id": "seuil_max_conso", "label": "Seuil Consommation Max (W)", "type": "number", "defaultValue": 2000},
        ],
        "checklist": [
            "Inspecter visuellement le moteur pour des signes de surchauffe ou de dommage.",
            "Vérifier que les connexions électriques sont bien serrées et non corrodées.",
        ],
    },
    {
        "id": "control-003",
        "name": "Alerte Pression Basse Huile Compresseur",
        "applicableMachineTypes": ["Compresseur"],
        "requiredSensorCategories": ["Pression"],
        "variablesUtilisees": ["pression_huile"],
        "verificationFormula": "sensor['pression_huile'].value >= machine.params['seuil_min_pression']",
        "description": "Alerte si la pression d'huile du compresseur est trop basse.",
        "expectedParams": [
            {"id": "seuil_min_pression", "label": "Seuil Pression Huile Minimum (bar)", "type": "number", "defaultValue": 0.5},
        ],
        "checklist": [
            "Vérifier le niveau d'huile du compresseur.",
            "Rechercher des fuites d'huile potentielles.",
        ],
    },
    {
        "id": "control-temp-four",
        "name": "Contrôle Température Four",
        "applicableMachineTypes": ["Four Professionnel"],
        "requiredSensorCategories": ["Température"],
        "variablesUtilisees": ["temp_four"],
        "verificationFormula": (
            "sensor['temp_four'].value >= machine.params['temp_min_cuisson'] "
            "&& sensor['temp_four'].value <= machine.params['temp_max_four']"
        ),
        "description": "Vérifie que le four reste dans sa plage de cuisson.",
        "expectedParams": [
            {"id": "temp_min_cuisson", "label": "Température Minimum de Cuisson (°C)", "type": "number", "defaultValue": 160},
            {"id": "temp_max_four", "label": "Température Maximum du Four (°C)", "type": "number"},
        ],
    },
    {
        "id": "control-temp-camion",
        "name": "Contrôle Température Camion",
        "applicableMachineTypes": ["Camion Réfrigéré"],
        "requiredSensorCategories": ["Température"],
        "variablesUtilisees": ["temp_caisson"],
        "verificationFormula": "sensor['temp_caisson'].value <= machine.params['temp_max']",
        "description": "Surveille la température du caisson réfrigéré.",
        "expectedParams": [
            {"id": "temp_max", "label": "Température Maximum Caisson (°C)", "type": "number", "defaultValue": 4},
        ],
        "checklist": [
            "Vérifier la fermeture des portes du caisson.",
            "Contrôler le fonctionnement du groupe froid.",
        ],
    },
    {
        "id": "control-srv-temp",
        "name": "Surveillance Température Serveur",
        "applicableMachineTypes": ["Serveur", "PC"],
        "requiredSensorCategories": ["Température Serveur"],
        "variablesUtilisees": ["temp_srv"],
        "verificationFormula": "sensor['temp_srv'].value <= machine.params['seuil_max_temp_srv']",
        "description": "Surveille la température interne du serveur pour éviter la surchauffe.",
        "expectedParams": [
            {"id": "seuil_max_temp_srv", "label": "Seuil Température Max Serveur (°C)", "type": "number", "defaultValue": 75},
        ],
        "checklist": [
            "S'assurer que les ventilateurs du serveur fonctionnent correctement.",
            "Vérifier que les entrées et sorties d'air du serveur ne sont pas obstruées.",
            "Contrôler la température ambiante de la salle des serveurs.",
        ],
    },
    {
        "id": "control-srv-cpu",
        "name": "Surveillance Utilisation CPU Serveur",
        "applicableMachineTypes": ["Serveur", "PC"],
        "requiredSensorCategories": ["Utilisation CPU"],
        "variablesUtilisees": ["cpu_usage_percent"],
        "verificationFormula": "sensor['cpu_usage_percent'].value <= machine.params['seuil_max_cpu']",
        "description": "Alerte si l'utilisation du CPU dépasse un seuil critique.",
        "expectedParams": [
            {"id": "seuil_max_cpu", "label": "Seuil Utilisation Max CPU (%)", "type": "number", "defaultValue": 90},
        ],
        "checklist": [
            "Identifier les processus consommant le plus de CPU.",
            "Vérifier les mises à jour système et logicielles.",
        ],
    },
    {
        "id": "control-srv-mem",
        "name": "Surveillance Utilisation Mémoire Serveur",
        "applicableMachineTypes": ["Serveur", "PC"],
        "requiredSensorCategories": ["Utilisation Mémoire"],
        "variablesUtilisees": ["mem_usage_percent"],
        "verificationFormula": "sensor['mem_usage_percent'].value <= machine.params['seuil_max_mem']",
        "description": "Alerte si l'utilisation de la mémoire vive (RAM) dépasse un seuil critique.",
        "expectedParams": [
            {"id": "seuil_max_mem", "label": "Seuil Utilisation Max Mémoire (%)", "type": "number", "defaultValue": 85},
        ],
        "checklist": [
            "Identifier les processus consommant le plus de mémoire.",
            "Vérifier les fuites de mémoire potentielles.",
        ],
    },
]

# --- Client Sites ---

SITES = [
    {
        "id": "site-restaurants-france",
        "name": "Restaurants Melting Pot (France)",
        "location": "France",
        "zones": [],
        "subSites": [
            {
                "id": "site-mp-paris",
                "name": "Melting Pot Paris",
                "location": "15 Rue de la Paix, Paris",
                "isConceptualSubSite": True,
                "zones": [
                    {
                        "id": "zone-paris-cuisine",
                        "name": "Cuisine Paris",
                        "zoneTypeId": "zt-cuisine",
                        "machines": [
                            {
                                "id": "machine-paris-four",
                                "name": "Four Pro 'Vulcan'",
                                "type": "Four Professionnel",
                                "status": "green",
                                "availableSensors": [
                                    {"id": "sensor-paris-four-temp", "name": "Sonde Temp. Four Vulcan", "provides": ["temp_four"]},
                                ],
                                "configuredControls": {
                                    "control-temp-four": {
                                        "isActive": True,
                                        "params": {"temp_max_four": 250, "temp_min_cuisson": 180},
                                        "sensorMappings": {"temp_four": "sensor-paris-four-temp"},
                                    },
                                },
                            },
                            {
                                "id": "machine-paris-frigo1",
                                "name": "Réfrigérateur 'ChefCool' R1",
                                "type": "Frigo",
                                "status": "green",
                                "availableSensors": [
                                    {"id": "sensor-paris-frigo1-temp", "name": "Sonde Temp. Frigo R1", "provides": ["temp"]},
                                ],
                                "configuredControls": {
                                    "control-001": {
                                        "isActive": True,
                                        "params": {"seuil_min": 1, "seuil_max": 4},
                                        "sensorMappings": {"temp": "sensor-paris-frigo1-temp"},
                                    },
                                },
                            },
                            {
                                "id": "machine-paris-frigo2",
                                "name": "Congélateur 'IceKing' C1",
                                "type": "Congélateur",
                                "status": "red",
                                "activeControlInAlert": {
                                    "controlId": "control-001",
                                    "controlName": "Contrôle Température Congélateur",
                                    "alertDetails": "Température interne à -10°C. Seuil min: -18°C.",
                                    "status": "red",
                                    "currentValues": {"temp": {"value": -10, "unit": "°C"}},
                                    "thresholds": {"seuil_min": -22, "seuil_max": -18},
                                    "relevantSensorVariable": "temp",
                                    "checklist": FRIDGE_CHECKLIST,
                                },
                                "availableSensors": [
                                    {"id": "sensor-paris-congel1-temp", "name": "Sonde Temp. Congel C1", "provides": ["temp"]},
                                ],
                                "configuredControls": {
                                    "control-001": {
                                        "isActive": True,
                                        "params": {"seuil_min": -22, "seuil_max": -18},
                                        "sensorMappings": {"temp": "sensor-paris-congel1-temp"},
                                    },
                                },
                            },
                        ],
                        "sensors": [
                            {
                                "id": "sensor-paris-cuisine-amb",
                                "name": "Ambiance Cuisine Paris",
                                "typeModel": "Sonde Ambiante THL v2.1",
                                "scope": "zone",
                                "status": "green",
                                "provides": ["temp", "humidity"],
                            },
                        ],
                    },
                    {
                        "id": "zone-paris-salle",
                        "name": "Salle Restaurant Paris",
                        "machines": [],
                        "sensors": [
                            {
                                "id": "sensor-paris-salle-co2",
                                "name": "Qualité Air Salle Paris",
                                "typeModel": "Détecteur CO2 Z-Air",
                                "scope": "zone",
                                "status": "green",
                                "provides": ["co2"],
                            },
                        ],
                    },
                    {
                        "id": "zone-paris-cave",
                        "name": "Cave à Vins Paris",
                        "machines": [],
                        "sensors": [
                            {
                                "id": "sensor-paris-cave-temphum",
                                "name": "Ambiance Cave Paris",
                                "typeModel": "Sonde Ambiante THL v2.1",
                                "scope": "zone",
                                "status": "orange",
                                "provides": ["temp", "humidity"],
                            },
                        ],
                    },
                ],
            },
            {
                "id": "site-mp-lyon",
                "name": "Melting Pot Lyon",
                "location": "20 Quai Saint Antoine, Lyon",
                "isConceptualSubSite": True,
                "zones": [
                    {
                        "id": "zone-lyon-cuisine",
                        "name": "Cuisine Lyon",
                        "zoneTypeId": "zt-cuisine",
                        "machines": [
                            {"id": "machine-lyon-frigo1", "name": "Réfrigérateur Positif Lyon", "type": "Frigo", "status": "green"},
                        ],
                        "sensors": [
                            {
                                "id": "sensor-lyon-frigo1-temp",
                                "name": "Sonde Frigo Lyon",
                                "typeModel": "Sonde Température T-100",
                                "scope": "machine",
                                "affectedMachineIds": ["machine-lyon-frigo1"],
                                "status": "green",
                                "provides": ["temp"],
                            },
                            {
                                "id": "sensor-lyon-cuisine-amb",
                                "name": "Ambiance Cuisine Lyon",
                                "typeModel": "Sonde Ambiante THL v2.1",
                                "scope": "zone",
                                "status": "green",
                                "provides": ["temp", "humidity"],
                            },
                        ],
                    },
                ],
            },
        ],
    },
    {
        "id": "site-boulangerie-france",
        "name": "Le Fournil Doré",
        "location": "7 Rue du Blé, Strasbourg, France",
        "zones": [
            {
                "id": "zone-fournil",
                "name": "Fournil",
                "machines": [
                    {"id": "machine-fournil-fourpain", "name": "Four à Pain 'Bongard'", "type": "Four Professionnel", "status": "green"},
                    {
                        "id": "machine-fournil-chflevain",
                        "name": "Chambre Froide Levain",
                        "type": "Frigo",
                        "status": "green",
                        "availableSensors": [
                            {"id": "sensor-levain-temp", "name": "Sonde Temp. Levain", "provides": ["temp"]},
                        ],
                        "configuredControls": {
                            "control-001": {
                                "isActive": True,
                                "params": {"seuil_min": 2, "seuil_max": 5},
                                "sensorMappings": {"temp": "sensor-levain-temp"},
                            },
                        },
                    },
                ],
                "subZones": [
                    {
                        "id": "zone-fournil-petrin",
                        "name": "Coin Pétrissage",
                        "machines": [
                            {"id": "machine-petrin", "name": "Pétrin Spirale", "type": "Equipement de Production", "status": "green"},
                        ],
                    },
                ],
            },
            {
                "id": "zone-boutique",
                "name": "Boutique",
                "machines": [
                    {"id": "machine-boutique-vitrine", "name": "Vitrine Réfrigérée Pâtisseries", "type": "Frigo", "status": "orange"},
                ],
            },
        ],
    },
    {
        "id": "site-livraison-france",
        "name": "RapideLivraison SAS",
        "location": "Pole Logistique Rungis, France",
        "zones": [
            {"id": "zone-liv-entrepot", "name": "Entrepôt Central Rungis", "machines": []},
            {
                "id": "zone-liv-vehicules",
                "name": "Flotte de Véhicules",
                "machines": [
                    {
                        "id": "machine-camion-fr01",
                        "name": "Camion FR-01 (AB-123-CD)",
                        "type": "Camion Réfrigéré",
                        "status": "red",
                        "activeControlInAlert": {
                            "controlId": "control-temp-camion",
                            "controlName": "Contrôle Température Camion",
                            "alertDetails": "Température caisson à 8°C. Seuil max: 4°C pour produits frais.",
                            "status": "red",
                            "currentValues": {"temp_caisson": {"value": 8, "unit": "°C"}},
                            "thresholds": {"temp_max": 4},
                            "relevantSensorVariable": "temp_caisson",
                            "checklist": [
                                "Vérifier la fermeture des portes du caisson.",
                                "Contrôler le fonctionnement du groupe froid.",
                            ],
                        },
                        "availableSensors": [
                            {
                                "id": "sensor-camion-fr01-gps-temp",
                                "name": "Tracker GPS/Temp Camion FR01",
                                "provides": ["gps_lat", "gps_lon", "temp_caisson", "temp"],
                            },
                        ],
                        "configuredControls": {
                            "control-temp-camion": {
                                "isActive": True,
                                "params": {"temp_max": 4},
                                "sensorMappings": {"temp_caisson": "sensor-camion-fr01-gps-temp"},
                            },
                        },
                    },
                    {"id": "machine-camion-fr02", "name": "Camion FR-02 (XY-789-ZZ)", "type": "Camion Réfrigéré", "status": "green"},
                ],
            },
        ],
    },
    {
        "id": "site-usine-tunisie",
        "name": "ProdTunis Industries",
        "location": "Zone Industrielle Mghira, Tunisie",
        "zones": [
            {
                "id": "zone-usine-embouteillage",
                "name": "Ligne d'Embouteillage Eau Minérale",
                "machines": [
                    {"id": "machine-embouteilleuse", "name": "Embouteilleuse 'Krones'", "type": "Equipement de Production", "status": "green"},
                ],
            },
            {
                "id": "zone-usine-maintenance",
                "name": "Atelier Maintenance",
                "machines": [
                    {
                        "id": "machine-compresseur-c1",
                        "name": "Compresseur Air Principal 'Atlas'",
                        "type": "Compresseur",
                        "status": "orange",
                        "activeControlInAlert": {
                            "controlId": "control-003",
                            "controlName": "Alerte Pression Basse Huile Compresseur",
                            "alertDetails": "Pression huile à 0.4 bar. Seuil min: 0.5 bar.",
                            "status": "orange",
                            "currentValues": {"pression_huile": {"value": 0.4, "unit": "bar"}},
                            "thresholds": {"seuil_min_pression": 0.5},
                            "relevantSensorVariable": "pression_huile",
                        },
                        "availableSensors": [
                            {
                                "id": "sensor-comp-c1-presshuile",
                                "name": "Sonde Pression Huile C1",
                                "provides": ["pression_huile", "press"],
                            },
                        ],
                        "configuredControls": {
                            "control-003": {
                                "isActive": True,
                                "params": {"seuil_min_pression": 0.5},
                                "sensorMappings": {"pression_huile": "sensor-comp-c1-presshuile"},
                            },
                        },
                    },
                ],
            },
        ],
    },
    {
        "id": "site-agrostock-tunisie",
        "name": "AgroStock Tunisie",
        "location": "Port de Radès, Tunisie",
        "zones": [],
        "subSites": [
            {
                "id": "site-entrepot-viandes",
                "name": "Entrepôt Viandes",
                "location": "AgroStock - Section Viandes",
                "isConceptualSubSite": True,
                "zones": [
                    {
                        "id": "zone-viande-chf-bovin",
                        "name": "Chambre Froide Bovins (-2°C)",
                        "zoneTypeId": "zt-chambre-froide",
                        "machines": [
                            {"id": "machine-chf-bovin1", "name": "Unité Réfrig. Bovin 1", "type": "Frigo", "status": "green"},
                        ],
                    },
                    {
                        "id": "zone-viande-chf-volaille",
                        "name": "Chambre Congélation Volailles (-18°C)",
                        "zoneTypeId": "zt-chambre-froide",
                        "machines": [
                            {"id": "machine-chf-volaille1", "name": "Unité Congél. Volaille 1", "type": "Congélateur", "status": "green"},
                        ],
                    },
                ],
            },
            {
                "id": "site-entrepot-fruitsleg",
                "name": "Entrepôt Fruits & Légumes",
                "location": "AgroStock - Section F&L",
                "isConceptualSubSite": True,
                "zones": [
                    {"id": "zone-fl-reception", "name": "Quai de Réception F&L", "machines": []},
                    {
                        "id": "zone-fl-chf-tropicaux",
                        "name": "Chambre Froide Fruits Tropicaux (+8°C)",
                        "zoneTypeId": "zt-chambre-froide",
                        "machines": [
                            {
                                "id": "machine-chf-tropic1",
                                "name": "Réfrigérateur Tropicaux T1",
                                "type": "Frigo",
                                "status": "red",
                                "activeControlInAlert": {
                                    "controlId": "control-001",
                                    "controlName": "Contrôle Température Frigo",
                                    "alertDetails": "Température à 12°C. Seuil max: +10°C.",
                                    "status": "red",
                                    "currentValues": {"temp": {"value": 12, "unit": "°C"}},
                                    "thresholds": {"seuil_min": 7, "seuil_max": 10},
                                    "relevantSensorVariable": "temp",
                                    "checklist": FRIDGE_CHECKLIST,
                                },
                                "availableSensors": [
                                    {"id": "sensor-tropic1-temp", "name": "Sonde Temp. Tropicaux T1", "provides": ["temp"]},
                                ],
                                "configuredControls": {
                                    "control-001": {
                                        "isActive": True,
                                        "params": {"seuil_min": 7, "seuil_max": 10},
                                        "sensorMappings": {"temp": "sensor-tropic1-temp"},
                                    },
                                },
                            },
                        ],
                    },
                ],
            },
        ],
    },
    {
        "id": "site-pi-servers-demo",
        "name": "Serveurs Pi Capnio (Exemples)",
        "location": "Divers",
        "zones": [
            {
                "id": "zone-pi-office",
                "name": "Bureau Client Exemple",
                "machines": [
                    {
                        "id": "machine-pi-office-main",
                        "name": "Serveur Pi - Bureau Principal",
                        "type": "PC",
                        "status": "green",
                        "availableSensors": [
                            {"id": "pi-office-temp-cpu", "name": "Température CPU Pi Bureau", "provides": ["temp_srv", "temp"]},
                            {"id": "pi-office-cpu-load", "name": "Charge CPU Pi Bureau", "provides": ["cpu_usage_percent"]},
                            {"id": "pi-office-mem-usage", "name": "Utilisation RAM Pi Bureau", "provides": ["mem_usage_percent"]},
                            {"id": "pi-office-disk-space", "name": "Espace Disque Pi Bureau", "provides": ["disk_free_gb"]},
                        ],
                        "configuredControls": {
                            "control-srv-temp": {
                                "isActive": True,
                                "params": {"seuil_max_temp_srv": 60},
                                "sensorMappings": {"temp_srv": "pi-office-temp-cpu"},
                            },
                            "control-srv-cpu": {
                                "isActive": True,
                                "params": {"seuil_max_cpu": 70},
                                "sensorMappings": {"cpu_usage_percent": "pi-office-cpu-load"},
                            },
                        },
                    },
                ],
                "sensors": [
                    {
                        "id": "ext-sensor-temp-ambiant",
                        "name": "Sonde Ambiante Bureau (via Pi)",
                        "typeModel": "Sonde Ambiante THL v2.1",
                        "scope": "zone",
                        "status": "green",
                        "provides": ["temp", "humidity"],
                    },
                    {
                        "id": "ext-sensor-co2-bureau",
                        "name": "Capteur CO2 Bureau (via Pi)",
                        "typeModel": "Détecteur CO2 Z-Air",
                        "scope": "zone",
                        "status": "green",
                        "provides": ["co2"],
                    },
                ],
            },
        ],
    },
]

# --- Admin Catalog ---

SENSOR_TYPES = [
    {
        "id": "st-thl-v21",
        "name": "Sonde Ambiante THL v2.1",
        "categories": ["temperature", "humidity", "light"],
        "keyMappings": {"t": "temp", "h": "humidity", "lux": "light", "bat": "battery_percent"},
        "description": "Sonde ambiante température / humidité / luminosité.",
        "examplePayload": {"t": 21.4, "h": 48, "lux": 310, "bat": 92},
    },
    {
        "id": "st-co2-zair",
        "name": "Détecteur CO2 Z-Air",
        "categories": ["air_quality"],
        "keyMappings": {"co2_ppm": "co2", "rssi": "rssi", "fw": ""},
        "description": "Détecteur de CO2 LoRaWAN.",
        "examplePayload": {"co2_ppm": 640, "rssi": -87, "fw": "1.4.2"},
    },
    {
        "id": "st-temp-t100",
        "name": "Sonde Température T-100",
        "categories": ["temperature"],
        "keyMappings": {"value": "temp"},
        "description": "Sonde filaire pour enceintes froides.",
    },
]

MACHINE_TYPES = [
    {"id": "mt-001", "name": "Frigo", "description": "Réfrigérateurs et congélateurs industriels"},
    {"id": "mt-002", "name": "Pompe Hydraulique", "description": "Pompes pour systèmes hydrauliques"},
    {"id": "mt-003", "name": "Armoire Électrique", "description": "Panneaux et armoires de contrôle électrique"},
    {"id": "mt-004", "name": "Compresseur", "description": "Compresseurs d'air industriels"},
]

ZONE_TYPES = [
    {
        "id": "zt-cuisine",
        "name": "Cuisine Professionnelle",
        "description": "Zone de préparation culinaire.",
        "bestPractices": "Contrôler quotidiennement les températures des enceintes froides.",
    },
    {
        "id": "zt-chambre-froide",
        "name": "Chambre Froide",
        "description": "Stockage réfrigéré ou congelé.",
        "bestPractices": "Limiter les ouvertures de porte et vérifier les joints chaque semaine.",
    },
]


def demo_forest() -> list[Site]:
    """Fresh, validated copy of the demo site forest."""
    return [Site.model_validate(site) for site in SITES]


def demo_control_definitions() -> list[ControlDefinition]:
    return [ControlDefinition.model_validate(c) for c in CONTROL_DEFINITIONS]


def demo_sensor_types() -> list[SensorTypeInfo]:
    return [SensorTypeInfo.model_validate(st) for st in SENSOR_TYPES]


def demo_machine_types() -> list[MachineTypeInfo]:
    return [MachineTypeInfo.model_validate(mt) for mt in MACHINE_TYPES]


def demo_zone_types() -> list[ZoneTypeInfo]:
    return [ZoneTypeInfo.model_validate(zt) for zt in ZONE_TYPES]

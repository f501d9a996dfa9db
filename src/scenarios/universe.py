"""Static market data: the listed universe, event catalogs and tax tables.

These tables are plain data. ``build_default_config`` turns them into a
validated ``SimulationConfig``.
"""
from typing import Dict, List, Tuple

from scenarios.base import (
    EventTemplate,
    SectorEventCatalog,
    SimulationConfig,
    StockDefinition,
    TaxRegime,
)

INDICATOR_NEURONS = [
    'momentum_5d', 'momentum_10d', 'momentum_20d', 'momentum_50d', 'momentum_1d_vs_avg5d',
    'trend_price_vs_sma_10', 'trend_price_vs_sma_20', 'trend_price_vs_sma_50',
    'trend_price_vs_sma_100', 'trend_price_vs_sma_200',
    'trend_sma_crossover_10_20', 'trend_sma_crossover_20_50', 'trend_sma_crossover_50_200',
    'trend_price_vs_ema_10', 'trend_price_vs_ema_20', 'trend_price_vs_ema_50',
    'trend_ema_crossover_10_20', 'trend_ema_crossover_20_50',
    'oscillator_rsi_7_contrarian', 'oscillator_rsi_14_contrarian', 'oscillator_rsi_21_contrarian',
    'oscillator_stochastic_k_14_contrarian',
    'volatility_bollinger_bandwidth_20', 'volatility_bollinger_percent_b_20',
    'macd_histogram',
    'volume_avg_20d_spike', 'volume_obv_trend_20d', 'volume_cmf_20',
    'volatility_atr_14',
    'sector_momentum_50d', 'region_momentum_50d',
    'event_sentiment_recent', 'event_impact_magnitude', 'event_type_is_macro', 'event_type_is_corporate',
]

CORPORATE_NEURONS = [
    'self_momentum_50d', 'self_volatility_atr_14', 'price_vs_ath',
    'market_momentum_50d', 'sector_momentum_50d', 'region_momentum_50d', 'opportunity_score',
    'event_sentiment_recent', 'event_impact_magnitude', 'event_type_is_macro', 'event_type_is_corporate',
]

STRATEGY_NAMES = [
    "Momentum Bot", "Value Seeker", "Quant Algo", "Risk Manager", "Trend Follower", "Contrarian",
    "Growth Chaser", "Index Follower", "Volatility Trader", "Sector Rotator", "Alpha Hunter",
]

NOISE_TRADER_NAMES = [
    "Noise Trader", "Random Walk Inc.", "Volatility Catalyst", "Chaos Agent", "Momentum Gambler",
    "Arbitrageur Prime", "The Contrarian", "Market Agitator", "Event Horizon Capital", "Stochastic Dynamics",
]

# Share of the universe listed in each region; Europe takes the remainder
REGION_SHARES = (('North America', 0.60), ('Asia', 0.25))

# (symbol, name, sector)
BASE_STOCKS: List[Tuple[str, str, str]] = [
    ('INNV', 'Innovate Corp', 'Technology'),
    ('TECH', 'TechGen Inc.', 'Technology'),
    ('HLTH', 'HealthSphere', 'Health'),
    ('ENRG', 'Syner-G', 'Energy'),
    ('FINX', 'FinEx Solutions', 'Finance'),
    ('QUAN', 'Quantum Leap', 'Technology'),
    ('CYBR', 'CyberSec Corp', 'Technology'),
    ('BIOF', 'BioFuture Labs', 'Health'),
    ('SOLR', 'Solaris Energy', 'Energy'),
    ('DRON', 'DroneWorks', 'Technology'),
    ('DATA', 'DataMine Inc.', 'Technology'),
    ('ROBO', 'RoboGenix', 'Technology'),
    ('AQUA', 'AquaPure', 'Industrials'),
    ('FUTR', 'Futuristics', 'Industrials'),
    ('SPCE', 'SpaceWarp', 'Industrials'),
    ('NANO', 'NanoBuild', 'Technology'),
    ('VRTX', 'Vertex Realty', 'Finance'),
    ('GAME', 'GameSphere', 'Technology'),
    ('MEDI', 'MediCare+', 'Health'),
    ('AGRI', 'AgriGrow', 'Industrials'),
    ('EDGE', 'Edge AI Systems', 'Technology'),
    ('CLD', 'CloudCore Inc.', 'Technology'),
    ('VR', 'Virtual Reality Labs', 'Technology'),
    ('IOT', 'Internet of Things Co.', 'Technology'),
    ('SFTW', 'Software Solutions', 'Technology'),
    ('LOGI', 'LogiCore', 'Technology'),
    ('GENE', 'Genomics PLC', 'Health'),
    ('TELE', 'TeleHealth Connect', 'Health'),
    ('SURG', 'Surgical Systems', 'Health'),
    ('VITA', 'VitaPharm', 'Health'),
    ('CARE', 'CareBotics', 'Health'),
    ('IMMU', 'ImmunoTherapeutics', 'Health'),
    ('HYDR', 'HydroGen Power', 'Energy'),
    ('WIND', 'Windmill Corp', 'Energy'),
    ('NUCL', 'Nuclear Fusion Inc.', 'Energy'),
    ('BATT', 'BatteryTech', 'Energy'),
    ('GEO', 'GeoThermal Dynamics', 'Energy'),
    ('GRID', 'SmartGrid Systems', 'Energy'),
    ('INSR', 'InsuranTech', 'Finance'),
    ('PAY', 'PaySphere', 'Finance'),
    ('LEND', 'LendLogic', 'Finance'),
    ('BLOK', 'BlockChain Ventures', 'Finance'),
    ('TRDE', 'TradeFlow', 'Finance'),
    ('WEAL', 'WealthWise', 'Finance'),
    ('AERO', 'AeroDynamics', 'Industrials'),
    ('SHIP', 'Global Shipping', 'Industrials'),
    ('BLD', 'BuildRight Construction', 'Industrials'),
    ('AUTO', 'AutoDrive Systems', 'Industrials'),
    ('CHEM', 'ChemiCorp', 'Industrials'),
    ('RAIL', 'RailWorks Logistics', 'Industrials'),
    ('QNTM', 'Quantum Core AI', 'Technology'),
    ('SGLR', 'Singularity Solutions', 'Technology'),
    ('FBRC', 'Fabricate Robotics', 'Technology'),
    ('CRWN', 'CrowdNet Systems', 'Technology'),
    ('PLGN', 'Polygon Graphics', 'Technology'),
    ('NVGTM', 'Navigate Mapping', 'Technology'),
    ('ZPHY', 'Zephyr OS', 'Technology'),
    ('ECHO', 'EchoComms Inc.', 'Technology'),
    ('VLCT', 'Velocity Data', 'Technology'),
    ('AXON', 'Axon Neural', 'Technology'),
    ('PXL', 'PixelForge', 'Technology'),
    ('CDX', 'Codex Software', 'Technology'),
    ('SYN', 'SynthoLogic', 'Technology'),
    ('VRTU', 'VirtuVerse', 'Technology'),
    ('ADPT', 'AdaptiCore', 'Technology'),
    ('EVLV', 'Evolv AI', 'Technology'),
    ('NBLA', 'Nebula Cloud', 'Technology'),
    ('FRGM', 'Fragment Security', 'Technology'),
    ('CRTX', 'Cortex Circuits', 'Technology'),
    ('LNKD', 'Link-State Comms', 'Technology'),
    ('OMNI', 'Omni-Metrics', 'Technology'),
    ('VCTR', 'Vector AI', 'Technology'),
    ('APEX', 'Apex Logic', 'Technology'),
    ('ZNTHW', 'Zenith Ware', 'Technology'),
    ('FSNDT', 'Fusion Data', 'Technology'),
    ('NRAL', 'Neural-Net Labs', 'Technology'),
    ('DGTZ', 'Digitize Solutions', 'Technology'),
    ('ALGO', 'Algo-Rhythm', 'Technology'),
    ('STRM', 'StreamCore', 'Technology'),
    ('ARCA', 'Arcane Software', 'Technology'),
    ('CRCL', 'Circuitry Inc.', 'Technology'),
    ('TTRN', 'Patternica', 'Technology'),
    ('MDLR', 'Modular Systems', 'Technology'),
    ('PRSM', 'Prism Analytics', 'Technology'),
    ('SPR', 'Sphere Virtual', 'Technology'),
    ('INTG', 'Integrix', 'Technology'),
    ('FLNTA', 'Fluent AI', 'Technology'),
    ('LYNX', 'Lynx Microsystems', 'Technology'),
    ('ORCL', 'Oracle Core', 'Technology'),
    ('PHSE', 'Phase Shift', 'Technology'),
    ('RDTN', 'Radiant Tech', 'Technology'),
    ('SCPT', 'ScriptLogic', 'Technology'),
    ('TNSN', 'Tension Networks', 'Technology'),
    ('UNTY', 'Unity Base', 'Technology'),
    ('WFRM', 'Waveform Digital', 'Technology'),
    ('XNPS', 'Synapse Dynamics', 'Technology'),
    ('YGG', 'Yggdrasil Computing', 'Technology'),
    ('ZTRX', 'Zetrix Solutions', 'Technology'),
    ('TSRT', 'Tesseract Systems', 'Technology'),
    ('ATLS', 'Atlas AI', 'Technology'),
    ('HIVE', 'HiveMind Connect', 'Technology'),
    ('MTRX', 'Matrix Labs', 'Technology'),
    ('PRLL', 'Parallel Process', 'Technology'),
    ('CBLT', 'Cobalt Robotics', 'Technology'),
    ('META', 'Meta-Verse Dynamics', 'Technology'),
    ('VTPH', 'Vertex Pharma', 'Health'),
    ('CRDL', 'CardioLogic', 'Health'),
    ('ONCX', 'Onco-X Therapeutics', 'Health'),
    ('SANO', 'SanoVita Labs', 'Health'),
    ('CURE', 'CureAll Pharma', 'Health'),
    ('HEAL', 'HealPoint Diagnostics', 'Health'),
    ('PLSE', 'Pulse-Wave Medical', 'Health'),
    ('VTAL', 'Vitalis Health', 'Health'),
    ('CLNX', 'Clini-Gen', 'Health'),
    ('RJUV', 'Rejuva Life Sciences', 'Health'),
    ('ORTH', 'Ortho-Solutions', 'Health'),
    ('PDIA', 'Pedia-Care Inc.', 'Health'),
    ('DNTL', 'Denta-Tech', 'Health'),
    ('OPTI', 'Opti-View Systems', 'Health'),
    ('PRCS', 'Precision Surgical', 'Health'),
    ('GNCS', 'Genecis Corp', 'Health'),
    ('TRNS', 'Trans-Medica', 'Health'),
    ('NBLS', 'Nebulis Inhalants', 'Health'),
    ('SNTC', 'Senti-Tech', 'Health'),
    ('BHWL', 'Bio-Wellness', 'Health'),
    ('CTSL', 'Catalyst Bio', 'Health'),
    ('DRMA', 'Derma-Cure', 'Health'),
    ('ELXR', 'Elixir Life', 'Health'),
    ('FLRA', 'Flora-Health', 'Health'),
    ('HYGA', 'Hygeia Labs', 'Health'),
    ('INFN', 'Infin-Gene', 'Health'),
    ('LMNL', 'Lumenal Devices', 'Health'),
    ('MCRB', 'Micro-Bionics', 'Health'),
    ('NUTR', 'Nutri-Gen', 'Health'),
    ('PRTG', 'Proteus Medical', 'Health'),
    ('SNTL', 'Sentinel Health', 'Health'),
    ('TRMA', 'Trauma-Care', 'Health'),
    ('UNVR', 'Univer-Salts', 'Health'),
    ('VCTS', 'Vectis Diagnostics', 'Health'),
    ('XNTC', 'Xenotic Pharma', 'Health'),
    ('ZMRN', 'Zym-Renew', 'Health'),
    ('AURA', 'Aura-Sense', 'Health'),
    ('CRBR', 'Cerebral Dynamics', 'Health'),
    ('DNVA', 'Dena-Vita Inc.', 'Health'),
    ('IMPL', 'Implanta-Tech', 'Health'),
    ('LNVA', 'Longev-A', 'Health'),
    ('MYCO', 'Myco-Pharma', 'Health'),
    ('NBLT', 'Nebulite', 'Health'),
    ('PULM', 'Pulmo-Care', 'Health'),
    ('RNWL', 'Renewal Med', 'Health'),
    ('Soma', 'Soma-Tech', 'Health'),
    ('TRQN', 'Tranquil-Life', 'Health'),
    ('VIVI', 'Vivid-Health', 'Health'),
    ('XTND', 'Extend-Life', 'Health'),
    ('ALGY', 'Alga-Health', 'Health'),
    ('KINE', 'Kineti-Care', 'Health'),
    ('NRVE', 'Nerve-Gen', 'Health'),
    ('STSK', 'Status-K', 'Health'),
    ('ZYGN', 'Zygon Health', 'Health'),
    ('FLUX', 'Flux Power Grid', 'Energy'),
    ('ATMO', 'Atmo-Sphere Energy', 'Energy'),
    ('TRRA', 'Terra-Volt', 'Energy'),
    ('CRYO', 'Cryo-Gen', 'Energy'),
    ('PYRO', 'Pyro-Source', 'Energy'),
    ('KNTC', 'Kinetic Power', 'Energy'),
    ('STTC', 'Static Electric', 'Energy'),
    ('WVFR', 'Waveform Energy', 'Energy'),
    ('TDAL', 'Tidal-Flow', 'Energy'),
    ('SPRK', 'Spark Resources', 'Energy'),
    ('PTRL', 'Petro-Global', 'Energy'),
    ('BFL', 'Bio-Fuel Corp', 'Energy'),
    ('CRBN', 'Carbon Capture Co.', 'Energy'),
    ('DRLL', 'Drill-Tech', 'Energy'),
    ('ELCT', 'Electri-Core', 'Energy'),
    ('FSL', 'Fossil Fuels Inc.', 'Energy'),
    ('GTHR', 'Geothermal Co.', 'Energy'),
    ('HBR', 'Harbor Energy', 'Energy'),
    ('ION', 'Ion-Drive', 'Energy'),
    ('JLT', 'Jolt Power', 'Energy'),
    ('LMN', 'Lumen-Watt', 'Energy'),
    ('MTRN', 'Metron Gas', 'Energy'),
    ('NRTH', 'North Sea Oil', 'Energy'),
    ('OCEN', 'Oceanic Power', 'Energy'),
    ('PPLN', 'PipeLine Inc.', 'Energy'),
    ('QSR', 'Quasar Energy', 'Energy'),
    ('RFN', 'Refine-Co', 'Energy'),
    ('SHLE', 'Shale Dynamics', 'Energy'),
    ('TRBN', 'Turbine Dynamics', 'Energy'),
    ('VLTA', 'Voltaic Systems', 'Energy'),
    ('XTRC', 'Extract Energy', 'Energy'),
    ('YTNE', 'Yotta-NRG', 'Energy'),
    ('ZENE', 'Zenith Energy', 'Energy'),
    ('AMPV', 'AmpereVolt', 'Energy'),
    ('CONV', 'Converge Power', 'Energy'),
    ('DYNO', 'Dyno-Source', 'Energy'),
    ('ETHN', 'Ethanol Plus', 'Energy'),
    ('FRAC', 'Fracture Oil Co.', 'Energy'),
    ('GIGA', 'GigaWatt Storage', 'Energy'),
    ('HELI', 'Helios Power', 'Energy'),
    ('INFRE', 'Infra-Grid Energy', 'Energy'),
    ('KILO', 'Kilo-Source', 'Energy'),
    ('LITH', 'Lithium Core', 'Energy'),
    ('MEGA', 'Mega-Charge', 'Energy'),
    ('NEON', 'Neon Gas Co.', 'Energy'),
    ('OPTM', 'Optima Fuel', 'Energy'),
    ('PLSM', 'Plasma-Drive', 'Energy'),
    ('RDT', 'Radiant Heat', 'Energy'),
    ('SONC', 'Sonic Energy', 'Energy'),
    ('THRM', 'Therma-Gen', 'Energy'),
    ('URAN', 'Uranium One', 'Energy'),
    ('VRTXW', 'Vortex Wind', 'Energy'),
    ('WATT', 'Watt-Solutions', 'Energy'),
    ('FSNPR', 'Fusion Power Co', 'Energy'),
    ('ACML', 'Accumulus Capital', 'Finance'),
    ('BNKR', 'BankRight', 'Finance'),
    ('CRDO', 'Credo Finance', 'Finance'),
    ('DIVI', 'Dividend Trust', 'Finance'),
    ('EQUI', 'Equi-Trade', 'Finance'),
    ('FLNTP', 'Fluent Payments', 'Finance'),
    ('GLBE', 'GlobalVest', 'Finance'),
    ('HRBR', 'Harbor Holdings', 'Finance'),
    ('IVST', 'Investa-Corp', 'Finance'),
    ('JBLT', 'Jubilee Trust', 'Finance'),
    ('KNSH', 'Kensho Capital', 'Finance'),
    ('LGCY', 'Legacy Bank', 'Finance'),
    ('MRKT', 'Market-Flow', 'Finance'),
    ('NEXS', 'Nexus Capital', 'Finance'),
    ('OPLN', 'Opulence Wealth', 'Finance'),
    ('PRSP', 'Prosper-Fund', 'Finance'),
    ('QNTF', 'Quant-Fi', 'Finance'),
    ('RELY', 'Rely-Sure', 'Finance'),
    ('STRL', 'Sterling Group', 'Finance'),
    ('TRST', 'Trust-Core', 'Finance'),
    ('UNFY', 'Unify Financial', 'Finance'),
    ('VLUE', 'Value-Base', 'Finance'),
    ('WRTH', 'Worth-Well', 'Finance'),
    ('XCHG', 'X-Change', 'Finance'),
    ('YLD', 'Yield-Stone', 'Finance'),
    ('ZENT', 'Zenith Trust', 'Finance'),
    ('AST', 'Asset-Wise', 'Finance'),
    ('BETA', 'Beta-Vest', 'Finance'),
    ('CMPT', 'Compound Capital', 'Finance'),
    ('DLR', 'Dollar-Wise', 'Finance'),
    ('FLIO', 'Folio-Metrics', 'Finance'),
    ('GRNT', 'Guaranty Trust', 'Finance'),
    ('HEDG', 'Hedge-Right', 'Finance'),
    ('INCM', 'Income-Plus', 'Finance'),
    ('LVRG', 'Leverage Co.', 'Finance'),
    ('MNTY', 'Moneta Systems', 'Finance'),
    ('NVGTF', 'Navigate Funds', 'Finance'),
    ('PLCY', 'Policy-Sure', 'Finance'),
    ('RTRN', 'Return-First', 'Finance'),
    ('SAVY', 'Savvy-Invest', 'Finance'),
    ('TNGS', 'Tangible Assets', 'Finance'),
    ('UTLY', 'Utility Finance', 'Finance'),
    ('VSTA', 'Vista Holdings', 'Finance'),
    ('WLTH', 'Wealth-Core', 'Finance'),
    ('XFIN', 'X-Finance', 'Finance'),
    ('YFIN', 'Y-Finance', 'Finance'),
    ('ZFIN', 'Z-Finance', 'Finance'),
    ('ALPH', 'Alpha-Vest', 'Finance'),
    ('CAP', 'Capital-Source', 'Finance'),
    ('EQTY', 'Equity-First', 'Finance'),
    ('FND', 'Foundation Trust', 'Finance'),
    ('GROW', 'Growth-Fund', 'Finance'),
    ('MNGD', 'Managed Assets', 'Finance'),
    ('AGRM', 'Agro-Mechanics', 'Industrials'),
    ('BLST', 'Ballisti-Co', 'Industrials'),
    ('CNST', 'Construct-X', 'Industrials'),
    ('DFNS', 'Defense Dynamics', 'Industrials'),
    ('ELEC', 'Elec-Mech', 'Industrials'),
    ('FABR', 'Fabri-Corp', 'Industrials'),
    ('GLBL', 'Global-Trans', 'Industrials'),
    ('HVAC', 'HVAC-Pro', 'Industrials'),
    ('INFRB', 'Infra-Build', 'Industrials'),
    ('JNT', 'Joint-Fab', 'Industrials'),
    ('KNMT', 'Kin-Metal', 'Industrials'),
    ('LBRC', 'Lubri-Co', 'Industrials'),
    ('MTRL', 'Materi-Ex', 'Industrials'),
    ('NVG', 'Navi-Gate Logistics', 'Industrials'),
    ('OPRT', 'Operate-Right', 'Industrials'),
    ('PMP', 'Pump-Works', 'Industrials'),
    ('QSTL', 'Quik-Steel', 'Industrials'),
    ('ROTO', 'Roto-Works', 'Industrials'),
    ('SHPNG', 'Ship-Right', 'Industrials'),
    ('TRBO', 'Turbo-Dyne', 'Industrials'),
    ('UTEC', 'Util-Tech', 'Industrials'),
    ('VLVE', 'Valve-Co', 'Industrials'),
    ('WELD', 'Weld-Right', 'Industrials'),
    ('XTRD', 'X-Trude', 'Industrials'),
    ('YRD', 'Yard-Works', 'Industrials'),
    ('ZNTHM', 'Zenith Manufacturing', 'Industrials'),
    ('APLY', 'Applied Mechanics', 'Industrials'),
    ('BRNG', 'Bearing-Co', 'Industrials'),
    ('CRGO', 'Cargo-Lift', 'Industrials'),
    ('DURA', 'Dura-Frame', 'Industrials'),
    ('ENVR', 'Enviro-Solutions', 'Industrials'),
    ('FLTR', 'Filter-Pro', 'Industrials'),
    ('GRND', 'Grind-Well', 'Industrials'),
    ('HMLT', 'Hamlet Machinery', 'Industrials'),
    ('INDM', 'Indu-Mech', 'Industrials'),
    ('LOGS', 'Logist-X', 'Industrials'),
    ('MOLD', 'Mold-Right', 'Industrials'),
    ('NBLD', 'Nova-Build', 'Industrials'),
    ('PPR', 'Paper-Works', 'Industrials'),
    ('RIVT', 'Rivet-Co', 'Industrials'),
    ('SFTY', 'Safety-First', 'Industrials'),
    ('TOOL', 'Tool-Right', 'Industrials'),
    ('UTIL', 'Util-Max', 'Industrials'),
    ('VNT', 'Vent-Sys', 'Industrials'),
    ('WRHS', 'Ware-House Inc.', 'Industrials'),
    ('XPRT', 'X-Port', 'Industrials'),
    ('YACH', 'Yacht-Builders', 'Industrials'),
    ('ZINC', 'Zinc-Co', 'Industrials'),
    ('CAST', 'Cast-Iron Works', 'Industrials'),
    ('DRIL', 'Drill-Right', 'Industrials'),
    ('ENGN', 'Engi-Pro', 'Industrials'),
    ('FORG', 'Forge-Masters', 'Industrials'),
    ('GEAR', 'Gear-Works', 'Industrials'),
    ('HVY', 'Heavy-Lift', 'Industrials'),
    ('LATH', 'Lathe-Masters', 'Industrials'),
]

# Reference price range and typical share count per sector, used when
# seeding from reference data instead of the synthetic 8-12 range
SECTOR_PROFILES: Dict[str, Dict[str, float]] = {
    'Technology': {'min_price': 60.0, 'max_price': 240.0, 'shares': 900_000_000},
    'Health': {'min_price': 40.0, 'max_price': 180.0, 'shares': 600_000_000},
    'Energy': {'min_price': 30.0, 'max_price': 120.0, 'shares': 700_000_000},
    'Finance': {'min_price': 35.0, 'max_price': 160.0, 'shares': 800_000_000},
    'Industrials': {'min_price': 45.0, 'max_price': 200.0, 'shares': 500_000_000},
}

# Washington B&O gross receipts rates (annual)
OPERATING_TAX_RATES = {
    'Technology': 0.00471,
    'Health': 0.00484,
    'Finance': 0.00484,
    'Industrials': 0.00484,
    'Energy': 0.00484,
    'default': 0.00484,
}

TAX_REGIMES = {
    'USA_WA': TaxRegime(name='USA_WA', long_term_rate=0.07, exemption=250_000),
    'TAX_FREE': TaxRegime(name='TAX_FREE', long_term_rate=0.0),
    'FLAT_15': TaxRegime(
        name='FLAT_15', long_term_rate=0.15, short_term_rate=0.15, allow_loss_carryforward=True
    ),
}


def _event(name, description, type, impact=None, region=None, category=None) -> EventTemplate:
    return EventTemplate(
        name=name, description=description, type=type, impact=impact, region=region, category=category
    )


CORPORATE_EVENTS_BY_SECTOR: Dict[str, SectorEventCatalog] = {
    'Technology': SectorEventCatalog(
        positive=[
            _event("New Patent Approved", "A key patent for a new technology has been approved.", 'positive', 1.05),
            _event("Successful AI Launch", "A new AI product launch exceeds all sales expectations.", 'positive', 1.08),
        ],
        negative=[
            _event("Major Data Breach", "A significant data breach has compromised user data.", 'negative', 0.92),
            _event("Antitrust Lawsuit", "Government files an antitrust lawsuit against the company.", 'negative', 0.90),
        ],
        neutral=[
            _event("Routine Software Update", "A routine software update is released.", 'neutral'),
        ],
    ),
    'Health': SectorEventCatalog(
        positive=[_event("FDA Approval", "A new drug receives full FDA approval.", 'positive', 1.15)],
        negative=[
            _event("Failed Clinical Trial", "A promising drug fails its Phase III clinical trials.", 'negative', 0.80),
        ],
        neutral=[
            _event("Medical Conference Presentation",
                   "Company presents research at a major medical conference.", 'neutral'),
        ],
    ),
    'Energy': SectorEventCatalog(
        positive=[_event("New Oil Field Discovery", "A massive new oil field is discovered.", 'positive', 1.10)],
        negative=[
            _event("Oil Spill Incident", "An oil spill has caused significant environmental damage.", 'negative', 0.88),
        ],
        neutral=[
            _event("Routine Maintenance Shutdown", "A refinery undergoes scheduled maintenance.", 'neutral'),
        ],
    ),
    'Finance': SectorEventCatalog(
        positive=[
            _event("Positive Earnings Surprise",
                   "Quarterly earnings significantly beat analyst expectations.", 'positive', 1.07),
        ],
        negative=[
            _event("SEC Investigation",
                   "The SEC has opened an investigation into the company's accounting practices.", 'negative', 0.91),
        ],
        neutral=[_event("New Branch Opening", "A new branch is opened in a major city.", 'neutral')],
    ),
    'Industrials': SectorEventCatalog(
        positive=[
            _event("Major Government Contract",
                   "The company wins a large, multi-year government contract.", 'positive', 1.09),
        ],
        negative=[
            _event("Factory Worker Strike", "Workers at a major factory have gone on strike.", 'negative', 0.94),
        ],
        neutral=[
            _event("Supply Chain Optimization",
                   "Company announces a new supply chain optimization plan.", 'neutral'),
        ],
    ),
}

MACRO_EVENTS: List[EventTemplate] = [
    _event("Interest Rate Hike",
           "The Federal Reserve unexpectedly raises interest rates, cooling the economy.",
           'negative', {'North America': 0.98, 'Europe': 0.99, 'Asia': 0.99}, 'North America', 'NegativeNA'),
    _event("Interest Rate Cut",
           "The European Central Bank (ECB) cuts rates to stimulate growth.",
           'positive', {'Europe': 1.02, 'North America': 1.005, 'Asia': 1.005}, 'Europe', 'PositiveEU'),
    _event("Positive Jobs Report",
           "The North American jobs report is much stronger than expected.",
           'positive', {'North America': 1.01, 'Europe': 1.002, 'Asia': 1.002}, 'North America', 'PositiveNA'),
    _event("Geopolitical Tensions Flare",
           "New geopolitical tensions flare up overseas, affecting global markets.",
           'political', 0.99, 'Global', 'PoliticalGlobal'),
    _event("Asian Manufacturing Boom",
           "Asian manufacturing data shows a massive boom, exceeding all forecasts.",
           'positive', {'Asia': 1.025, 'North America': 1.005, 'Europe': 1.005}, 'Asia', 'PositiveAsia'),
    _event("Major Hurricane Forms",
           "A category 5 hurricane is threatening major coastal industrial zones, "
           "disrupting shipping and energy production.",
           'disaster', 0.985, 'North America', 'DisasterGlobal'),
    _event("Key Global Trade Deal Signed",
           "A new international trade agreement is signed between major economic blocs, "
           "expected to boost exports and reduce tariffs.",
           'political', 1.015, 'Global', 'PoliticalGlobal'),
    _event("Snap Election Called",
           "A surprise election in a key European market introduces significant political uncertainty.",
           'political', {'Europe': 0.99, 'North America': 0.998, 'Asia': 0.998}, 'Europe', 'NegativeEU'),
    _event("Massive Earthquake Strikes",
           "A powerful 7.8 magnitude earthquake has disrupted supply chains in a critical "
           "Asian microchip manufacturing region.",
           'disaster', {'Asia': 0.97, 'North America': 0.99, 'Europe': 0.99}, 'Asia', 'DisasterGlobal'),
    _event("Global Infrastructure Bill",
           "A massive global infrastructure spending bill is passed, promising to boost the "
           "Industrials and Energy sectors worldwide.",
           'political', 1.02, 'Global', 'PositiveGlobal'),
    _event("Widespread Flooding",
           "Unprecedented flooding across key agricultural regions is expected to impact food "
           "prices and related industries.",
           'disaster', 0.99, 'Global', 'DisasterGlobal'),
    _event("New Tech Sector Regulations",
           "Governments announce sweeping new regulations for the tech sector, impacting data "
           "privacy and competition.",
           'political', {'Technology': 0.95}, 'Global', 'PoliticalGlobal'),
    _event("Global Trade War Escalates",
           "A trade war between major economic blocs escalates, with new tariffs announced on a "
           "wide range of goods.",
           'political', 0.97, 'Global', 'PoliticalGlobal'),
    _event("Major Cyber Attack",
           "A sophisticated cyber attack disrupts financial networks across Europe, causing "
           "temporary market chaos.",
           'disaster', {'Europe': 0.98, 'Finance': 0.96}, 'Europe', 'DisasterGlobal'),
    _event("Widespread Wildfires",
           "Severe wildfires in key industrial and residential zones are causing massive economic "
           "disruption and supply chain issues.",
           'disaster', 0.98, 'North America', 'DisasterGlobal'),
    _event("Sudden Diplomatic Thaw",
           "A surprising diplomatic breakthrough between rival nations eases long-standing "
           "tensions, boosting investor confidence.",
           'political', 1.01, 'Global', 'PoliticalGlobal'),
    _event("Global Famine Warning",
           "International agencies issue a severe famine warning for several regions due to "
           "drought and conflict, impacting agricultural commodities.",
           'disaster', {'Industrials': 1.02, 'default': 0.99}, 'Global', 'DisasterGlobal'),
    _event("Energy Sanctions Imposed",
           "Major energy-producing nations face new international sanctions, causing a spike in "
           "global energy prices.",
           'political', {'Energy': 1.10, 'default': 0.98}, 'Global', 'PoliticalGlobal'),
    _event("Unexpected Political Scandal",
           "A major political scandal in an Asian economic power leads to leadership uncertainty "
           "and market jitters.",
           'political', {'Asia': 0.98}, 'Asia', 'NegativeAsia'),
]


def assign_regions(stocks: List[StockDefinition], rng) -> List[StockDefinition]:
    """Shuffle the universe and list ~60% in North America, ~25% in Asia, the rest in Europe.

    Stocks that already carry a region keep it.
    """
    shuffled = list(stocks)
    rng.shuffle(shuffled)
    total = len(shuffled)
    cutoffs = []
    running = 0
    for region, share in REGION_SHARES:
        running += int(total * share)
        cutoffs.append((running, region))

    assigned = []
    for index, stock in enumerate(shuffled):
        if stock.region is not None:
            assigned.append(stock)
            continue
        region = next((name for cutoff, name in cutoffs if index < cutoff), 'Europe')
        assigned.append(stock.model_copy(update={'region': region}))
    return assigned


def default_stock_definitions() -> List[StockDefinition]:
    """The full universe, regions unassigned."""
    return [StockDefinition(symbol=symbol, name=name, sector=sector) for symbol, name, sector in BASE_STOCKS]


def build_default_config(**overrides) -> SimulationConfig:
    """Full universe, catalogs and tax tables with optional field overrides."""
    params = dict(
        stocks=default_stock_definitions(),
        macro_events=list(MACRO_EVENTS),
        corporate_events=dict(CORPORATE_EVENTS_BY_SECTOR),
        tax_regimes=dict(TAX_REGIMES),
        operating_tax_rates=dict(OPERATING_TAX_RATES),
    )
    params.update(overrides)
    return SimulationConfig(**params)

"""Shared constants for event routing and numeric bounds."""

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT256_MAX = 2**256 - 1

# Template names, as declared by the subgraph manifest
FACTORY_TEMPLATE = "RibbonFactory"
INSTRUMENT_TEMPLATE = "Instrument"

# Event names on the wire
INSTRUMENT_CREATED = "InstrumentCreated"
INSTRUMENT_CREATED_LEGACY = "InstrumentCreatedLegacy"
POSITION_CREATED = "PositionCreated"
PURCHASED = "Purchased"
EXERCISED = "Exercised"

CURSOR_ID = "default"

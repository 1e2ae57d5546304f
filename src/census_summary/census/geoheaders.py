"""Geographic header column layouts of the summary geography files."""

from typing import Dict, List, Optional

# ACS geography file (.csv), 2011 onward. SUMLEVEL and COMPONENT are renamed
# SUMLEV and GEOCOMP so that every dataset shares the same key names.
ACS_GEOHEADERS: List[str] = [
    "FILEID",
    "STUSAB",
    "SUMLEV",
    "GEOCOMP",
    "LOGRECNO",
    "US",
    "REGION",
    "DIVISION",
    "STATECE",
    "STATE",
    "COUNTY",
    "COUSUB",
    "PLACE",
    "TRACT",
    "BLKGRP",
    "CONCIT",
    "AIANHH",
    "AIANHHFP",
    "AIHHTLI",
    "AITSCE",
    "AITS",
    "ANRC",
    "CBSA",
    "CSA",
    "METDIV",
    "MACC",
    "MEMI",
    "NECTA",
    "CNECTA",
    "NECTADIV",
    "UA",
    "BLANK1",
    "CDCURR",
    "SLDU",
    "SLDL",
    "BLANK2",
    "BLANK3",
    "ZCTA5",
    "SUBMCD",
    "SDELM",
    "SDSEC",
    "SDUNI",
    "UR",
    "PCI",
    "BLANK4",
    "BLANK5",
    "PUMA5",
    "BLANK6",
    "GEOID",
    "NAME",
    "BTTR",
    "BTBG",
    "BLANK7",
]

ACS_BUILTIN_FROM_YEAR = 2011

# PL 94-171 geographic header file (xxgeo2020.pl)
PL_GEOHEADERS_2020: List[str] = [
    "FILEID", "STUSAB", "SUMLEV", "GEOVAR", "GEOCOMP", "CHARITER", "CIFSN", "LOGRECNO",
    "GEOID", "GEOCODE", "REGION", "DIVISION", "STATE", "STATENS", "COUNTY", "COUNTYCC",
    "COUNTYNS", "COUSUB", "COUSUBCC", "COUSUBNS", "SUBMCD", "SUBMCDCC", "SUBMCDNS",
    "ESTATE", "ESTATECC", "ESTATENS", "CONCIT", "CONCITCC", "CONCITNS", "PLACE", "PLACECC",
    "PLACENS", "TRACT", "BLKGRP", "BLOCK", "AIANHH", "AIHHTLI", "AIANHHFP", "AIANHHCC",
    "AIANHHNS", "AITS", "AITSFP", "AITSCC", "AITSNS", "TTRACT", "TBLKGRP", "ANRC", "ANRCCC",
    "ANRCNS", "CBSA", "MEMI", "CSA", "METDIV", "NECTA", "NMEMI", "CNECTA", "NECTADIV",
    "CBSAPCI", "NECTAPCI", "UA", "UATYPE", "UR", "CD116", "CD118", "CD119", "CD120", "CD121",
    "SLDU18", "SLDU22", "SLDU24", "SLDU26", "SLDU28", "SLDL18", "SLDL22", "SLDL24", "SLDL26",
    "SLDL28", "VTD", "VTDI", "ZCTA", "SDELM", "SDSEC", "SDUNI", "PUMA", "AREALAND",
    "AREAWATR", "BASENAME", "NAME", "FUNCSTAT", "GCUNI", "POP100", "HU100", "INTPTLAT",
    "INTPTLON", "LSADC", "PARTFLAG", "UGA",
]

# Columns every geography read returns
KEY_COLUMNS: List[str] = ["GEOID", "NAME", "LOGRECNO", "SUMLEV", "GEOCOMP"]

# Geo headers naming a single entity, for which an area name can be looked up
NAMED_GEOHEADERS = ("STATE", "COUNTY", "PLACE", "COUSUB", "CBSA")

# Geo headers the raw files only fill in at their own summary level; small
# geographies inherit them from the geo-reference dataset instead
CONTAINMENT_GEOHEADERS = ("COUSUB", "PLACE")

GEOHEADER_DESCRIPTIONS: Dict[str, str] = {
    "FILEID": "File identification",
    "STUSAB": "State postal abbreviation",
    "SUMLEV": "Summary level",
    "GEOCOMP": "Geographic component",
    "LOGRECNO": "Logical record number",
    "US": "US",
    "REGION": "Census region",
    "DIVISION": "Census division",
    "STATECE": "State (census code)",
    "STATE": "State (FIPS code)",
    "COUNTY": "County of current residence",
    "COUSUB": "County subdivision (FIPS)",
    "PLACE": "Place (FIPS code)",
    "TRACT": "Census tract",
    "BLKGRP": "Block group",
    "BLOCK": "Block",
    "CONCIT": "Consolidated city",
    "AIANHH": "American Indian area/Alaska Native area/Hawaiian home land (census)",
    "AIANHHFP": "American Indian area/Alaska Native area/Hawaiian home land (FIPS)",
    "AIHHTLI": "American Indian trust land/Hawaiian home land indicator",
    "AITSCE": "American Indian tribal subdivision (census)",
    "AITS": "American Indian tribal subdivision (FIPS)",
    "ANRC": "Alaska Native regional corporation (FIPS)",
    "CBSA": "Metropolitan and micropolitan statistical area",
    "CSA": "Combined statistical area",
    "METDIV": "Metropolitan statistical area-metropolitan division",
    "MACC": "Metropolitan area central city",
    "MEMI": "Metropolitan/micropolitan indicator flag",
    "NECTA": "New England city and town area",
    "CNECTA": "New England city and town combined statistical area",
    "NECTADIV": "New England city and town area division",
    "UA": "Urban area",
    "CDCURR": "Current congressional district",
    "SLDU": "State legislative district upper",
    "SLDL": "State legislative district lower",
    "ZCTA5": "5-digit ZIP code tabulation area",
    "ZCTA": "5-digit ZIP code tabulation area",
    "SUBMCD": "Subminor civil division (FIPS)",
    "SDELM": "State-school district (elementary)",
    "SDSEC": "State-school district (secondary)",
    "SDUNI": "State-school district (unified)",
    "UR": "Urban/rural",
    "PCI": "Principal city indicator",
    "PUMA5": "Public use microdata area - 5% file",
    "PUMA": "Public use microdata area",
    "VTD": "Voting district",
    "GEOID": "Geographic identifier",
    "NAME": "Area name",
    "BTTR": "Tribal tract",
    "BTBG": "Tribal block group",
    "INTPTLAT": "Internal point (latitude)",
    "INTPTLON": "Internal point (longitude)",
    "POP100": "Population count (100%)",
    "HU100": "Housing unit count (100%)",
}


def builtin_geoheader_layout(dataset: str, year: int) -> Optional[List[str]]:
    """
    Geography file column layout shipped with the package.

    Args:
        dataset: Dataset kind value ("acs1year", "acs5year", "decennial")
        year: Survey year

    Returns:
        Ordered column names, or None if the layout for that year must be
        supplied as an override file under the data root
    """
    if dataset in ("acs1year", "acs5year") and year >= ACS_BUILTIN_FROM_YEAR:
        return ACS_GEOHEADERS
    if dataset == "decennial" and year == 2020:
        return PL_GEOHEADERS_2020
    return None

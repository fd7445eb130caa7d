from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple

from packages.story_geo.normalize import normalize_text

logger = logging.getLogger(__name__)


# Canonical district name -> renamed, colonial, transliterated or colloquial names.
DISTRICT_ALIASES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    # Karnataka
    "Bengaluru Urban": ("Bangalore Urban", "Bangalore", "Bengaluru", "Bangalore City", "Bengaluru City", "Silicon City"),
    "Bengaluru Rural": ("Bangalore Rural",),
    "Mysuru": ("Mysore",),
    "Mangaluru": ("Mangalore", "Kudla", "Kodial"),
    "Dakshina Kannada": ("South Canara", "South Kanara"),
    "Uttara Kannada": ("North Canara", "North Kanara", "Karwar"),
    "Belagavi": ("Belgaum", "Belgavi"),
    "Kalaburagi": ("Gulbarga",),
    "Vijayapura": ("Bijapur",),
    "Ballari": ("Bellary",),
    "Shivamogga": ("Shimoga",),
    "Tumakuru": ("Tumkur",),
    "Chikkamagaluru": ("Chikmagalur", "Chickmagalur"),
    "Hubballi-Dharwad": ("Hubli-Dharwad", "Hubli", "Hubballi", "Dharwar"),
    "Kodagu": ("Coorg",),
    "Chamarajanagar": ("Chamrajnagar",),
    "Hassan": ("Hasana",),
    # Maharashtra
    "Mumbai": ("Bombay", "Mumbai City", "Greater Mumbai", "Bombay City"),
    "Mumbai Suburban": ("Bombay Suburban", "Mumbai Suburbs"),
    "Pune": ("Poona",),
    "Thane": ("Thana",),
    "Ahilyanagar": ("Ahmednagar", "Ahmadnagar"),
    "Dharashiv": ("Osmanabad",),
    "Raigad": ("Kolaba",),
    "Nagpur": ("Orange City",),
    "Nashik": ("Nasik",),
    "Kolhapur": ("Karveer",),
    "Palghar": ("Palghar district",),
    # Delhi and the National Capital Region
    "New Delhi": ("Dilli", "Lutyens Delhi"),
    "Gurugram": ("Gurgaon",),
    "Gautam Buddha Nagar": ("Noida", "Greater Noida", "GB Nagar"),
    "Nuh": ("Mewat",),
    "Faridabad": ("Faridabad district",),
    # West Bengal
    "Kolkata": ("Calcutta",),
    "Howrah": ("Haora",),
    "Hooghly": ("Hugli",),
    "Bardhaman": ("Burdwan",),
    "Darjeeling": ("Darjiling",),
    "Medinipur": ("Midnapore", "Midnapur"),
    "Purulia": ("Puruliya",),
    "Cooch Behar": ("Koch Bihar", "Coochbehar"),
    "North 24 Parganas": ("North Twenty Four Parganas", "Uttar 24 Pargana"),
    "South 24 Parganas": ("South Twenty Four Parganas", "Dakshin 24 Pargana"),
    # Tamil Nadu
    "Chennai": ("Madras",),
    "Thoothukudi": ("Tuticorin",),
    "Tiruchirappalli": ("Trichy", "Tiruchi", "Trichinopoly"),
    "Kanniyakumari": ("Kanyakumari", "Cape Comorin"),
    "Thanjavur": ("Tanjore",),
    "Tirunelveli": ("Tinnevelly",),
    "Coimbatore": ("Kovai",),
    "Madurai": ("Madura",),
    "Nilgiris": ("The Nilgiris", "Ooty", "Udhagamandalam", "Ootacamund"),
    "Villupuram": ("Viluppuram",),
    "Kancheepuram": ("Kanchipuram", "Conjeevaram"),
    # Kerala
    "Thiruvananthapuram": ("Trivandrum",),
    "Kochi": ("Cochin",),
    "Ernakulam": ("Ernakulam district",),
    "Kozhikode": ("Calicut",),
    "Thrissur": ("Trichur",),
    "Kollam": ("Quilon",),
    "Alappuzha": ("Alleppey",),
    "Kannur": ("Cannanore",),
    "Palakkad": ("Palghat",),
    "Malappuram": ("Malapuram",),
    # Andhra Pradesh and Telangana
    "Visakhapatnam": ("Vizag", "Vishakhapatnam", "Waltair"),
    "Vijayawada": ("Bezawada",),
    "NTR": ("NTR district",),
    "Sri Potti Sriramulu Nellore": ("Nellore", "SPSR Nellore"),
    "YSR Kadapa": ("Kadapa", "Cuddapah", "YSR district"),
    "Tirupati": ("Tirupathi",),
    "Anantapur": ("Anantapuramu", "Ananthapur"),
    "Rajamahendravaram": ("Rajahmundry",),
    "Kakinada": ("Cocanada",),
    "Machilipatnam": ("Masulipatnam", "Machilipattanam"),
    "Ranga Reddy": ("Rangareddy", "Rangareddi"),
    "Medchal-Malkajgiri": ("Medchal Malkajgiri", "Medchal"),
    "Warangal": ("Orugallu",),
    "Secunderabad": ("Secunderabad Cantonment",),
    # Gujarat
    "Ahmedabad": ("Amdavad", "Ahmadabad"),
    "Vadodara": ("Baroda",),
    "Bharuch": ("Broach",),
    "Surat": ("Suryapur",),
    "Kachchh": ("Kutch", "Cutch"),
    "Banaskantha": ("Banas Kantha",),
    "Sabarkantha": ("Sabar Kantha",),
    "Panchmahal": ("Panch Mahals", "Panchmahals"),
    # Rajasthan
    "Jaipur": ("Pink City",),
    "Udaipur": ("City of Lakes",),
    "Jodhpur": ("Blue City", "Marwar"),
    "Sri Ganganagar": ("Ganganagar",),
    "Chittorgarh": ("Chittor", "Chittaurgarh"),
    "Jhunjhunu": ("Jhunjhunun",),
    # Uttar Pradesh
    "Prayagraj": ("Allahabad",),
    "Ayodhya": ("Faizabad",),
    "Varanasi": ("Benares", "Banaras", "Kashi"),
    "Kanpur Nagar": ("Cawnpore", "Kanpur City"),
    "Lucknow": ("Lakhnau",),
    "Mathura": ("Muttra",),
    "Bhadohi": ("Sant Ravidas Nagar",),
    "Kasganj": ("Kanshiram Nagar",),
    "Shamli": ("Prabuddh Nagar",),
    "Hapur": ("Panchsheel Nagar",),
    "Amroha": ("Jyotiba Phule Nagar",),
    "Ghaziabad": ("Gaziabad",),
    # Madhya Pradesh
    "Narmadapuram": ("Hoshangabad",),
    "Indore": ("Indur",),
    "Jabalpur": ("Jubbulpore",),
    "Khandwa": ("East Nimar",),
    "Khargone": ("West Nimar",),
    "Sagar": ("Saugor",),
    # Bihar and Jharkhand
    "Patna": ("Pataliputra", "Azimabad"),
    "Gaya": ("Gayaji",),
    "Purnia": ("Purnea",),
    "Munger": ("Monghyr",),
    "Darbhanga": ("Dharbhanga",),
    "Ranchi": ("Ranchi district",),
    "East Singhbhum": ("Jamshedpur", "Purbi Singhbhum", "Tatanagar"),
    "West Singhbhum": ("Chaibasa", "Pashchimi Singhbhum"),
    "Dhanbad": ("Coal Capital",),
    "Sahibganj": ("Sahebganj",),
    # Odisha
    "Khordha": ("Khurda",),
    "Bhubaneswar": ("Bhubaneshwar",),
    "Cuttack": ("Katak",),
    "Baleshwar": ("Balasore",),
    "Ganjam": ("Berhampur", "Brahmapur"),
    "Mayurbhanj": ("Mayurbhanja",),
    "Sundargarh": ("Sundergarh", "Rourkela"),
    # Punjab, Haryana, Himachal and the north
    "Sahibzada Ajit Singh Nagar": ("Mohali", "SAS Nagar"),
    "Shaheed Bhagat Singh Nagar": ("Nawanshahr", "SBS Nagar"),
    "Sri Muktsar Sahib": ("Muktsar",),
    "Amritsar": ("Ambarsar",),
    "Ludhiana": ("Ludhiyana",),
    "Shimla": ("Simla",),
    "Kangra": ("Dharamshala", "Dharamsala"),
    "Leh": ("Ladakh",),
    "Srinagar": ("Srinagar district",),
    "Anantnag": ("Islamabad Kashmir",),
    "Baramulla": ("Varmul", "Baramula"),
    "Dehradun": ("Dehra Dun", "Doon"),
    "Haridwar": ("Hardwar",),
    "Udham Singh Nagar": ("Rudrapur",),
    "Pauri Garhwal": ("Garhwal",),
    # North-east
    "Kamrup Metropolitan": ("Guwahati", "Gauhati", "Kamrup Metro"),
    "Kamrup": ("Kamrup Rural",),
    "Sivasagar": ("Sibsagar",),
    "Dibrugarh": ("Dibrugarh district",),
    "Imphal West": ("Imphal",),
    "East Khasi Hills": ("Shillong",),
    "Aizawl": ("Aijal",),
    "Kohima": ("Kohima district",),
    "West Tripura": ("Agartala",),
    "Gangtok": ("East Sikkim", "Gangtok district"),
    "Papum Pare": ("Itanagar",),
    # Goa and union territories
    "North Goa": ("Panaji", "Panjim", "Uttar Goa"),
    "South Goa": ("Margao", "Madgaon", "Dakshin Goa"),
    "Puducherry": ("Pondicherry", "Pondy"),
    "Chandigarh": ("Chandigarh UT",),
    "South Andaman": ("Port Blair", "Sri Vijaya Puram"),
    # Pakistan
    "Karachi": ("Karachi Division",),
    "Lahore": ("Lahore District",),
    "Faisalabad": ("Lyallpur",),
    "Sahiwal": ("Montgomery",),
    "Jacobabad": ("Khangarh",),
    "Islamabad Capital Territory": ("Islamabad", "ICT Islamabad"),
    "Rawalpindi": ("Pindi",),
    "Peshawar": ("Pekhawar",),
    # Bangladesh
    "Dhaka": ("Dacca",),
    "Chattogram": ("Chittagong",),
    "Cumilla": ("Comilla",),
    "Barishal": ("Barisal",),
    "Jashore": ("Jessore",),
    "Bogura": ("Bogra",),
    "Chapai Nawabganj": ("Nawabganj",),
    # Sri Lanka and Nepal
    "Colombo": ("Kolamba",),
    "Galle": ("Point de Galle",),
    "Kandy": ("Maha Nuwara", "Senkadagala"),
    "Kathmandu": ("Kantipur", "Kathmandu Valley"),
    "Lalitpur": ("Patan",),
    "Bhaktapur": ("Bhadgaon",),
})


class AliasIndex:
    """Read-only canonical/alias lookup built once from an alias mapping."""

    def __init__(self, table: Mapping[str, Sequence[str]]) -> None:
        aliases: Dict[str, Tuple[str, ...]] = {}
        reverse: Dict[str, str] = {}
        for canonical, names in table.items():
            aliases[canonical] = tuple(names)
            for name in (canonical, *names):
                key = normalize_text(name)
                if not key:
                    continue
                existing = reverse.get(key)
                if existing is not None and existing != canonical:
                    logger.warning(f"alias {name!r} already maps to {existing!r}; ignoring {canonical!r}")
                    continue
                reverse[key] = canonical
        self._aliases: Mapping[str, Tuple[str, ...]] = MappingProxyType(aliases)
        self._reverse: Mapping[str, str] = MappingProxyType(reverse)

    def __len__(self) -> int:
        return len(self._reverse)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_text(name) in self._reverse

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def canonical_for(self, name: str) -> str:
        return self._reverse.get(normalize_text(name), name)

    def aliases_for(self, canonical: str) -> Tuple[str, ...]:
        return self._aliases.get(canonical, ())

    def variants_for(self, name: str) -> Tuple[str, ...]:
        """Alias phase needles for a candidate: its canonical's aliases, plus the canonical if renamed."""
        canonical = self.canonical_for(name)
        variants = self.aliases_for(canonical)
        if normalize_text(canonical) != normalize_text(name):
            variants = (canonical, *variants)
        return variants


_INDEX_LOCK = threading.Lock()
_DEFAULT_INDEX: Optional[AliasIndex] = None


def get_alias_index() -> AliasIndex:
    global _DEFAULT_INDEX
    if _DEFAULT_INDEX is not None:
        return _DEFAULT_INDEX
    with _INDEX_LOCK:
        if _DEFAULT_INDEX is None:
            _DEFAULT_INDEX = AliasIndex(DISTRICT_ALIASES)
            logger.debug(f"alias index built: {len(DISTRICT_ALIASES)} canonicals, {len(_DEFAULT_INDEX)} keys")
    return _DEFAULT_INDEX

"""Static element data: symbols, atomic numbers, weights and oxidation tables.

All tables are built once at import time and exposed read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# (symbol, atomic number, IUPAC 2021 standard atomic weight). Weights are kept as
# decimal strings so they convert to exact fractions.
_ELEMENT_ROWS = (
    ("H", 1, "1.008"), ("He", 2, "4.002602"), ("Li", 3, "6.94"), ("Be", 4, "9.0121831"),
    ("B", 5, "10.81"), ("C", 6, "12.011"), ("N", 7, "14.007"), ("O", 8, "15.999"),
    ("F", 9, "18.998403163"), ("Ne", 10, "20.1797"), ("Na", 11, "22.98976928"),
    ("Mg", 12, "24.305"), ("Al", 13, "26.9815384"), ("Si", 14, "28.085"),
    ("P", 15, "30.973761998"), ("S", 16, "32.06"), ("Cl", 17, "35.45"), ("Ar", 18, "39.948"),
    ("K", 19, "39.0983"), ("Ca", 20, "40.078"), ("Sc", 21, "44.955908"), ("Ti", 22, "47.867"),
    ("V", 23, "50.9415"), ("Cr", 24, "51.9961"), ("Mn", 25, "54.938043"), ("Fe", 26, "55.845"),
    ("Co", 27, "58.933194"), ("Ni", 28, "58.6934"), ("Cu", 29, "63.546"), ("Zn", 30, "65.38"),
    ("Ga", 31, "69.723"), ("Ge", 32, "72.630"), ("As", 33, "74.921595"), ("Se", 34, "78.971"),
    ("Br", 35, "79.904"), ("Kr", 36, "83.798"), ("Rb", 37, "85.4678"), ("Sr", 38, "87.62"),
    ("Y", 39, "88.90584"), ("Zr", 40, "91.224"), ("Nb", 41, "92.90637"), ("Mo", 42, "95.95"),
    ("Tc", 43, "98"), ("Ru", 44, "101.07"), ("Rh", 45, "102.90549"), ("Pd", 46, "106.42"),
    ("Ag", 47, "107.8682"), ("Cd", 48, "112.414"), ("In", 49, "114.818"), ("Sn", 50, "118.710"),
    ("Sb", 51, "121.760"), ("Te", 52, "127.60"), ("I", 53, "126.90447"), ("Xe", 54, "131.293"),
    ("Cs", 55, "132.90545196"), ("Ba", 56, "137.327"), ("La", 57, "138.90547"),
    ("Ce", 58, "140.116"), ("Pr", 59, "140.90766"), ("Nd", 60, "144.242"), ("Pm", 61, "145"),
    ("Sm", 62, "150.36"), ("Eu", 63, "151.964"), ("Gd", 64, "157.25"), ("Tb", 65, "158.92535"),
    ("Dy", 66, "162.500"), ("Ho", 67, "164.93033"), ("Er", 68, "167.259"),
    ("Tm", 69, "168.93422"), ("Yb", 70, "173.045"), ("Lu", 71, "174.9668"), ("Hf", 72, "178.49"),
    ("Ta", 73, "180.94788"), ("W", 74, "183.84"), ("Re", 75, "186.207"), ("Os", 76, "190.23"),
    ("Ir", 77, "192.217"), ("Pt", 78, "195.084"), ("Au", 79, "196.966570"), ("Hg", 80, "200.592"),
    ("Tl", 81, "204.38"), ("Pb", 82, "207.2"), ("Bi", 83, "208.98040"), ("Po", 84, "209"),
    ("At", 85, "210"), ("Rn", 86, "222"), ("Fr", 87, "223"), ("Ra", 88, "226"), ("Ac", 89, "227"),
    ("Th", 90, "232.0377"), ("Pa", 91, "231.03588"), ("U", 92, "238.02891"), ("Np", 93, "237"),
    ("Pu", 94, "244"), ("Am", 95, "243"), ("Cm", 96, "247"), ("Bk", 97, "247"), ("Cf", 98, "251"),
    ("Es", 99, "252"), ("Fm", 100, "257"), ("Md", 101, "258"), ("No", 102, "259"),
    ("Lr", 103, "262"), ("Rf", 104, "267"), ("Db", 105, "270"), ("Sg", 106, "271"),
    ("Bh", 107, "270"), ("Hs", 108, "277"), ("Mt", 109, "276"), ("Ds", 110, "281"),
    ("Rg", 111, "280"), ("Cn", 112, "285"), ("Nh", 113, "284"), ("Fl", 114, "289"),
    ("Mc", 115, "288"), ("Lv", 116, "293"), ("Ts", 117, "292"), ("Og", 118, "294"),
)

ATOMIC_NUMBERS: Mapping[str, int] = MappingProxyType(
    {symbol: number for symbol, number, _ in _ELEMENT_ROWS}
)
ATOMIC_WEIGHTS: Mapping[str, str] = MappingProxyType(
    {symbol: weight for symbol, _, weight in _ELEMENT_ROWS}
)

# Exact isotopic masses (u) keyed the same way isotopic atoms are keyed in a
# species composition.
ISOTOPE_MASSES: Mapping[str, str] = MappingProxyType({
    "H-1": "1.00782503223", "H-2": "2.01410177812", "H-3": "3.0160492779",
    "C-12": "12", "C-13": "13.00335483507", "C-14": "14.003241989",
    "N-14": "14.00307400443", "N-15": "15.00010889888",
    "O-16": "15.99491461957", "O-17": "16.99913175650", "O-18": "17.99915961286",
    "F-19": "18.99840316273", "Na-23": "22.9897692820",
    "Mg-24": "23.98504190", "Mg-25": "24.98583692", "Mg-26": "25.98259297",
    "Al-27": "26.98153853", "Si-28": "27.97692653465", "Si-29": "28.97649466490",
    "Si-30": "29.97377022", "P-31": "30.97376199842",
    "S-32": "31.97207117", "S-33": "32.97145876", "S-34": "33.96786701", "S-36": "35.96708071",
    "Cl-35": "34.96885268", "Cl-37": "36.96590260",
    "K-39": "38.9637064864", "K-40": "39.963998166", "K-41": "40.9618252579",
    "Ca-40": "39.9625909", "Ca-42": "41.9586456", "Ca-43": "42.9587666",
    "Ca-44": "43.9554811", "Ca-46": "45.9536890", "Ca-48": "47.9525229",
    "Fe-54": "53.9396105", "Fe-56": "55.9349375", "Fe-57": "56.9353940", "Fe-58": "57.9332756",
    "Cu-63": "62.9295975", "Cu-65": "64.9277895",
    "Zn-64": "63.9291422", "Zn-66": "65.9260334", "Zn-67": "66.9271273",
    "Zn-68": "67.9248442", "Zn-70": "69.9253193",
    "Br-79": "78.9183371", "Br-81": "80.9162906", "I-127": "126.9044719",
    "U-235": "235.0439299", "U-238": "238.0507882",
})

ALKALI_METALS = frozenset({"Li", "Na", "K", "Rb", "Cs", "Fr"})
ALKALINE_EARTH_METALS = frozenset({"Be", "Mg", "Ca", "Sr", "Ba", "Ra"})
HALOGENS = frozenset({"F", "Cl", "Br", "I", "At"})

# Commonly observed oxidation states, most common first.
COMMON_OXIDATION_STATES: Mapping[str, tuple[int, ...]] = MappingProxyType({
    "H": (1, -1),
    "Li": (1,), "Na": (1,), "K": (1,), "Rb": (1,), "Cs": (1,),
    "Be": (2,), "Mg": (2,), "Ca": (2,), "Sr": (2,), "Ba": (2,),
    "B": (3,), "Al": (3,), "Ga": (3,),
    "C": (4, 2, -4), "Si": (4, -4),
    "N": (5, 4, 3, 2, 1, 0, -1, -2, -3),
    "P": (5, 3, -3), "As": (5, 3, -3),
    "O": (-2, -1, 0), "S": (6, 4, 2, 0, -2),
    "F": (-1,), "Cl": (7, 5, 3, 1, -1), "Br": (7, 5, 1, -1), "I": (7, 5, 1, -1),
    "Fe": (3, 2), "Cu": (2, 1), "Zn": (2,), "Ag": (1,), "Au": (3, 1),
    "Cr": (6, 3), "Mn": (7, 4, 2), "Ni": (2,), "Co": (3, 2),
    "Pb": (4, 2), "Sn": (4, 2),
})

# Search range for elements missing from COMMON_OXIDATION_STATES.
DEFAULT_OXIDATION_RANGE = (-3, -2, -1, 0, 1, 2, 3, 4, 5, 6)


def is_element(symbol: str) -> bool:
    return symbol in ATOMIC_NUMBERS


def base_element(key: str) -> str:
    """Strip an isotope mass from a composition key (``"C-13"`` -> ``"C"``)."""
    return key.split("-", 1)[0]

"""Reference factors bundled with the application, loaded by `riverdb seed-factors`."""

from riverdb.factor.repository import FactorRepository

SEED_FACTORS = {
    "issue": [
        ("Flooding", "Recurrent overbank flooding endangering settlements and infrastructure"),
        ("Water Pollution", "Degraded water quality from untreated sewage, runoff or industry"),
        ("Channelization", "Straightened, confined channel with loss of natural morphology"),
        ("Habitat Loss", "Disappearance of riparian and aquatic habitats"),
        ("Erosion", "Bank and bed erosion threatening land and structures"),
        ("Lack of Access", "River corridor inaccessible to the public"),
        ("Drought", "Low flows and water scarcity during dry periods"),
    ],
    "idea": [
        ("Floodplain Reconnection", "Give the river room by reconnecting its floodplain"),
        ("Daylighting", "Uncover a culverted or buried stream"),
        ("Riparian Buffer", "Restore vegetated strips along the banks"),
        ("Dam Removal", "Remove obsolete transverse structures to restore continuity"),
        ("Green Infrastructure", "Nature-based stormwater retention in the catchment"),
        ("Riverside Park", "Public green space along the river"),
    ],
    "ecology": [
        ("Biodiversity", "Increase in species richness and abundance"),
        ("Fish Migration", "Restored longitudinal connectivity for fish"),
        ("Water Quality", "Improved physico-chemical water quality"),
        ("Groundwater Recharge", "Enhanced infiltration and aquifer recharge"),
        ("Sediment Dynamics", "Natural sediment transport and deposition"),
    ],
    "socio_cultural": [
        ("Recreation", "Leisure use of the river corridor"),
        ("Community Participation", "Residents involved in planning and maintenance"),
        ("Cultural Heritage", "Protection of historic river-related heritage"),
        ("Environmental Education", "Learning opportunities about river ecosystems"),
        ("Public Health", "Health benefits from cleaner water and green space"),
    ],
    "economic": [
        ("Property Value", "Rising real estate value near the restored river"),
        ("Tourism", "Visitor income attracted by the river"),
        ("Flood Damage Reduction", "Avoided costs from flood events"),
        ("Public Funding", "Project financed from public budgets"),
        ("Private Investment", "Project co-financed by private actors"),
    ],
    "upgrading": [
        ("Informal Settlement Upgrading", "Improvement of informal housing along the river"),
        ("Resettlement", "Relocation of households from hazard zones"),
        ("Infrastructure Upgrading", "Improved sanitation, drainage and roads"),
        ("Land Tenure Regularization", "Legal security of tenure for residents"),
    ],
    "governance": [
        ("Top-down", "Led by national or regional authorities"),
        ("Bottom-up", "Initiated by local communities or NGOs"),
        ("Co-management", "Shared responsibility between authorities and stakeholders"),
        ("Public-Private Partnership", "Joint delivery by public and private partners"),
    ],
}


def seed_factors(repo: FactorRepository = None) -> dict[str, int]:
    """
    Insert the bundled factors, skipping names that already exist.

    Returns the number of newly created factors per category.
    """
    repo = repo or FactorRepository()
    created = {}
    for category, factors in SEED_FACTORS.items():
        created[category] = sum(
            1 for name, description in factors if repo.create(category, name, description)
        )
    return created

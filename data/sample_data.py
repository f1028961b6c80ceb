"""Generate synthetic space datasets for the Studio Space Planner."""

import os
import random

import pandas as pd


def generate_space_division_df() -> pd.DataFrame:
    """Space division rows: 2 buildings, 3 levels each, 4-6 rooms per level.

    BUILDING and LEVEL are only filled on the first row of each block, as in the
    exported floor plans.
    """
    random.seed(42)
    rows = []
    buildings = [("Design Center", "DC"), ("Studio Hall", "SH")]
    studio_names = ["North Studio", "South Studio", "Corner Lab", "Project Room", "Critique Space", "-"]
    for b_name, prefix in buildings:
        first_in_building = True
        for level in range(1, 4):
            first_in_level = True
            for idx in range(1, random.randint(4, 6) + 1):
                room_id = f"{prefix}{level}{idx:02d}"
                rows.append({
                    "BUILDING": b_name if first_in_building else "",
                    "LEVEL": f"Level {level}" if first_in_level else "",
                    "STUDIO": random.choice(studio_names),
                    "ROOM": room_id,
                    "ASTRA OCCUPANCY": str(random.choice([12, 16, 18, 20, 24, 30])),
                    "NOTES": "",
                })
                first_in_building = False
                first_in_level = False
    return pd.DataFrame(rows)


def generate_combined_spaces_df() -> pd.DataFrame:
    """Two zones that merge adjacent rooms; the second carries a capacity override."""
    return pd.DataFrame([
        {"combined_id": "DC1-A", "members": "DC101, DC102", "capacity_override": "", "mode": "open"},
        {"combined_id": "SH2-A", "members": "SH201,SH202,SH203", "capacity_override": "60", "mode": "studio"},
    ])


def generate_sample_csvs(output_dir: str):
    """Write sample CSV files to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    generate_space_division_df().to_csv(os.path.join(output_dir, "space_division.csv"), index=False)
    generate_combined_spaces_df().to_csv(os.path.join(output_dir, "combined_spaces.csv"), index=False)


def generate_sample_excel(output_dir: str):
    """Write a single two-tab Excel workbook."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "space_data.xlsx")
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        generate_space_division_df().to_excel(writer, sheet_name="Space Division", index=False)
        generate_combined_spaces_df().to_excel(writer, sheet_name="Combined Spaces", index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csvs(out)
    generate_sample_excel(out)
    print("Sample CSV and Excel files generated in sample_files/")

# backend/vx_core/vaccinations/guidelines_us.py
"""
Default routine childhood immunization table for the US (birth to 6 years).
Loaded by `manage.py seed_guidelines`.
"""

LIVE_VACCINE_CONTRAINDICATIONS = ["Severe immunodeficiency", "Pregnancy", "Gelatin allergy", "Neomycin allergy"]


def _doses(code, name, ages, *, mandatory=True, max_age=None, contraindications=(), notes=""):
    total = len(ages)
    return [
        {
            "country_code": "US",
            "region_code": "",
            "vaccine_code": code,
            "vaccine_name": name,
            "recommended_age_months": age,
            "min_age_months": 0 if n == 1 else ages[n - 2],
            "max_age_months": max_age,
            "dose_number": n,
            "total_doses": total,
            "is_mandatory": mandatory,
            "contraindications": list(contraindications),
            "notes": notes,
        }
        for n, age in enumerate(ages, start=1)
    ]


US_GUIDELINES = [
    *_doses("HEPB", "Hepatitis B", [0, 1, 6], contraindications=["Yeast allergy"]),
    *_doses("RV", "Rotavirus", [2, 4, 6], max_age=8, contraindications=["Intussusception", "SCID"],
            notes="Last dose no later than 8 months."),
    *_doses("DTAP", "Diphtheria, Tetanus, Pertussis", [2, 4, 6, 15, 48], contraindications=["Encephalopathy"]),
    *_doses("HIB", "Haemophilus influenzae type b", [2, 4, 6, 12], max_age=59),
    *_doses("PCV", "Pneumococcal conjugate", [2, 4, 6, 12], max_age=59),
    *_doses("IPV", "Inactivated poliovirus", [2, 4, 6, 48],
            contraindications=["Neomycin allergy", "Streptomycin allergy", "Polymyxin B allergy"]),
    *_doses("MMR", "Measles, Mumps, Rubella", [12, 48], contraindications=LIVE_VACCINE_CONTRAINDICATIONS),
    *_doses("VAR", "Varicella", [12, 48], contraindications=LIVE_VACCINE_CONTRAINDICATIONS),
    *_doses("HEPA", "Hepatitis A", [12, 18]),
    *_doses("FLU", "Influenza (annual)", [6], mandatory=False, contraindications=["Guillain-Barre syndrome"],
            notes="Repeat every flu season."),
]

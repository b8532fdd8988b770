"""
Seed the catalogue of Mexican banks offering car credits.
Rates, CAT and opening commissions are approximate published values.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cliquealo.db.database import get_db_context, init_db
from cliquealo.db.models import Bank

# (name, annual rate %, CAT %, opening commission %)
BANKS = [
    ("BBVA", 12.5, 16.2, 2.0),
    ("Banorte", 13.2, 17.1, 1.8),
    ("Santander", 13.8, 17.5, 2.2),
    ("Scotiabank", 14.2, 18.3, 1.5),
    ("Citibanamex", 13.5, 17.8, 2.0),
    ("HSBC", 14.5, 18.9, 1.7),
    ("Inbursa", 12.8, 16.5, 1.9),
    ("Afirme", 14.8, 19.2, 2.1),
    ("BanRegio", 13.9, 18.0, 1.6),
    ("Hey Banco", 12.9, 16.8, 1.8),
]


def main():
    init_db()

    with get_db_context() as db:
        existing = {name for (name,) in db.query(Bank.nombre).all()}

        created = 0
        for nombre, tasa, cat, comision in BANKS:
            if nombre in existing:
                print(f"Bank already exists: {nombre}. Skipping.")
                continue

            db.add(Bank(nombre=nombre, tasa=tasa, cat=cat, comision=comision))
            created += 1

    print(f"\nCreated {created} banks")


if __name__ == "__main__":
    main()

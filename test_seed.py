import json

import pytest

from errors import DecodeFailure
from seed import countries_from_records, load_countries


def _record(name, code, emission):
    return {"countryName": name, "twoCharacterCode": code, "threeCharacterCode": code + "X",
            "emission": emission, "gdp": 1_000_000.0, "population": 1000,
            "budget": 0.0, "gini": 30.0, "edi": 0.9}


def test_emissions_are_shares_of_base_emissions():
    countries = countries_from_records([_record("A", "AA", 30.0), _record("B", "BB", 10.0)])
    assert countries[0].base_yearly_emissions == pytest.approx(10.34 * 0.75)
    assert countries[1].base_yearly_emissions == pytest.approx(10.34 * 0.25)
    assert countries[0].yearly_emissions == countries[0].base_yearly_emissions


def test_gdp_in_thousands():
    country = countries_from_records([_record("A", "AA", 1.0)])[0]
    assert country.base_gdp == 1000.0
    assert country.gdp == 1000.0


def test_bad_records():
    with pytest.raises(DecodeFailure):
        countries_from_records([{"countryName": "A"}])
    with pytest.raises(ValueError):
        countries_from_records([_record("A", "AA", 0.0)])


def test_load_file(tmp_path):
    path = tmp_path / "countries.json"
    path.write_text(json.dumps([_record("A", "AA", 2.0)]))
    countries = load_countries(str(path), base_emission=5.0)
    assert countries[0].base_yearly_emissions == pytest.approx(5.0)

    path.write_text("{broken")
    with pytest.raises(DecodeFailure):
        load_countries(str(path))


def test_bundled_seed_contains_netherlands():
    codes = [c.country_code for c in load_countries()]
    assert "NL" in codes
    assert len(codes) == len(set(codes))

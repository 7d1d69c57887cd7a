"""
company_data.py — Embedded company financials.

Annual figures in USD, keyed by metric then fiscal year. Rounded sample
values intended for the dashboard demo, not for analysis.
"""

from typing import Any, Dict, List

COMPANY_DATA: List[Dict[str, Any]] = [
    {
        "Ticker": "AAPL",
        "Company name": "Apple Inc.",
        "Financials": {
            "revenue": {
                "2019": 260_174_000_000,
                "2020": 274_515_000_000,
                "2021": 365_817_000_000,
                "2022": 394_328_000_000,
                "2023": 383_285_000_000,
            },
            "net_income": {
                "2019": 55_256_000_000,
                "2020": 57_411_000_000,
                "2021": 94_680_000_000,
                "2022": 99_803_000_000,
                "2023": 96_995_000_000,
            },
            "operating_income": {
                "2019": 63_930_000_000,
                "2020": 66_288_000_000,
                "2021": 108_949_000_000,
                "2022": 119_437_000_000,
                "2023": 114_301_000_000,
            },
            "total_assets": {
                "2019": 338_516_000_000,
                "2020": 323_888_000_000,
                "2021": 351_002_000_000,
                "2022": 352_755_000_000,
                "2023": 352_583_000_000,
            },
            "free_cash_flow": {
                "2019": 58_896_000_000,
                "2020": 73_365_000_000,
                "2021": 92_953_000_000,
                "2022": 111_443_000_000,
                "2023": 99_584_000_000,
            },
        },
    },
    {
        "Ticker": "MSFT",
        "Company name": "Microsoft Corporation",
        "Financials": {
            "revenue": {
                "2019": 125_843_000_000,
                "2020": 143_015_000_000,
                "2021": 168_088_000_000,
                "2022": 198_270_000_000,
                "2023": 211_915_000_000,
            },
            "net_income": {
                "2019": 39_240_000_000,
                "2020": 44_281_000_000,
                "2021": 61_271_000_000,
                "2022": 72_738_000_000,
                "2023": 72_361_000_000,
            },
            "operating_income": {
                "2019": 42_959_000_000,
                "2020": 52_959_000_000,
                "2021": 69_916_000_000,
                "2022": 83_383_000_000,
                "2023": 88_523_000_000,
            },
            "total_assets": {
                "2019": 286_556_000_000,
                "2020": 301_311_000_000,
                "2021": 333_779_000_000,
                "2022": 364_840_000_000,
                "2023": 411_976_000_000,
            },
            "free_cash_flow": {
                "2019": 38_260_000_000,
                "2020": 45_234_000_000,
                "2021": 56_118_000_000,
                "2022": 65_149_000_000,
                "2023": 59_475_000_000,
            },
        },
    },
    {
        "Ticker": "GOOGL",
        "Company name": "Alphabet Inc.",
        "Financials": {
            "revenue": {
                "2019": 161_857_000_000,
                "2020": 182_527_000_000,
                "2021": 257_637_000_000,
                "2022": 282_836_000_000,
                "2023": 307_394_000_000,
            },
            "net_income": {
                "2019": 34_343_000_000,
                "2020": 40_269_000_000,
                "2021": 76_033_000_000,
                "2022": 59_972_000_000,
                "2023": 73_795_000_000,
            },
            "operating_income": {
                "2019": 34_231_000_000,
                "2020": 41_224_000_000,
                "2021": 78_714_000_000,
                "2022": 74_842_000_000,
                "2023": 84_293_000_000,
            },
            "total_assets": {
                "2019": 275_909_000_000,
                "2020": 319_616_000_000,
                "2021": 359_268_000_000,
                "2022": 365_264_000_000,
                "2023": 402_392_000_000,
            },
        },
    },
    {
        "Ticker": "AMZN",
        "Company name": "Amazon.com, Inc.",
        "Financials": {
            "revenue": {
                "2019": 280_522_000_000,
                "2020": 386_064_000_000,
                "2021": 469_822_000_000,
                "2022": 513_983_000_000,
                "2023": 574_785_000_000,
            },
            "net_income": {
                "2019": 11_588_000_000,
                "2020": 21_331_000_000,
                "2021": 33_364_000_000,
                "2022": -2_722_000_000,
                "2023": 30_425_000_000,
            },
            "operating_income": {
                "2019": 14_541_000_000,
                "2020": 22_899_000_000,
                "2021": 24_879_000_000,
                "2022": 12_248_000_000,
                "2023": 36_852_000_000,
            },
            "free_cash_flow": {
                "2019": 21_653_000_000,
                "2020": 25_924_000_000,
                "2021": -14_726_000_000,
                "2022": -11_569_000_000,
                "2023": 32_217_000_000,
            },
        },
    },
    {
        "Ticker": "F",
        "Company name": "Ford Motor Company",
        "Financials": {
            "revenue": {
                "2019": 155_900_000_000,
                "2020": 127_144_000_000,
                "2021": 136_341_000_000,
                "2022": 158_057_000_000,
                "2023": 176_191_000_000,
            },
            "net_income": {
                "2019": 47_000_000,
                "2020": -1_279_000_000,
                "2021": 17_937_000_000,
                "2022": -1_981_000_000,
                "2023": 4_347_000_000,
            },
            "total_assets": {
                "2019": 258_537_000_000,
                "2020": 267_261_000_000,
                "2021": 257_035_000_000,
                "2022": 255_884_000_000,
                "2023": 273_310_000_000,
            },
            "employees": {
                "2019": 190_000,
                "2020": 186_000,
                "2021": 183_000,
                "2022": 173_000,
                "2023": 177_000,
            },
        },
    },
]

from __future__ import annotations

from typing import Any, Dict, List

from input_readers.image import bytes_to_data_url


TEXT_SYSTEM_PROMPT = (
    "You are a product information extraction assistant. "
    "Extract structured data from product labels and return valid JSON only."
)

IMAGE_SYSTEM_PROMPT = (
    "You are a product information extraction assistant. "
    "Analyze product label images and extract structured data. Return valid JSON only."
)

FIELD_GUIDE = """
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
BASIC INFORMATION
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- name: Product name
- company: Company or brand name
- manufacturer: Manufacturer name (if different from company)
- trademark: Trademark information
- barcode: Barcode or product code
- netWeight: Net weight/quantity (e.g., "200 g", "1 L")
- mrp: Maximum Retail Price exactly as printed (e.g., "₹50.00")
- price: Current price if different from MRP

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
DATES & BATCH
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- expiryDate: Expiry date in YYYY-MM-DD format if available
- bestBefore: Best before information (e.g., "SIX MONTHS FROM MANUFACTURE")
- manufacturingDate: Manufacturing date in YYYY-MM-DD format if available
- batchNumber: Batch or lot number

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
INGREDIENTS & NUTRITION
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- ingredients: Array of all ingredient names, in label order
- nutritionalInfo: Object with nutritional values as printed:
  - energy: Energy value (e.g., "555 kcal")
  - protein: Protein content
  - totalCarbohydrate: Total carbohydrates
  - sugars: Sugar content
  - totalFat: Total fat content
  - saturatedFat: Saturated fat
  - transFat: Trans fat
  - sodium: Sodium content
  - servingSize: Serving size (e.g., "Per 100g")

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
MANUFACTURING & REGULATORY
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- manufacturingAddresses: Array of manufacturing unit addresses
- fssaiLicense: FSSAI license number(s)
- vegetarian: Vegetarian status ("Yes", "No", or symbol description)

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
CONTACT INFORMATION
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- consumerContact: Object with:
  - phone: Consumer helpline/phone number
  - email: Consumer email address
  - address: Consumer service address
  - website: Company website URL

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
OTHER DETAILS
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- otherDetails: Object with any other relevant information (string key-value pairs)
""".strip()

OUTPUT_RULES = """
OUTPUT RULES:
- Return ONE flat JSON object using exactly the field names above as top-level keys
- Use null for missing values
- Dates, prices and weights stay as text; do NOT convert units or currency
- Return ONLY valid JSON, no additional text or markdown formatting
""".strip()


def build_text_prompt(ocr_text: str) -> str:
    return f"""
Extract comprehensive product information from the following text extracted from a product label.
Return a JSON object with the following fields (use null for missing values):

{FIELD_GUIDE}

Extract ALL available information from the text. Be thorough and include nutritional facts,
addresses, contact details, and any regulatory information.

{OUTPUT_RULES}

TEXT TO PARSE:
{ocr_text}
""".strip()


def build_image_prompt() -> str:
    return f"""
Extract comprehensive product information from this product label image.
Return a JSON object with ALL available information using these fields:

{FIELD_GUIDE}

Extract ALL visible information including nutritional facts, addresses, contact details,
and regulatory information.

{OUTPUT_RULES}
""".strip()


def build_text_messages(ocr_text: str) -> List[Dict[str, Any]]:
    """Chat messages asking the model to structure OCR text."""
    return [
        {"role": "system", "content": TEXT_SYSTEM_PROMPT},
        {"role": "user", "content": build_text_prompt(ocr_text)},
    ]


def build_image_messages(image_bytes: bytes, mime_type: str) -> List[Dict[str, Any]]:
    """Chat messages with a text part and the label image as a data URL."""
    return [
        {"role": "system", "content": IMAGE_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": build_image_prompt()},
                {"type": "image_url", "image_url": {"url": bytes_to_data_url(image_bytes, mime_type)}},
            ],
        },
    ]

# Prompts force the model to answer with a bare JSON object of the target shape.

IDENTIFY_SYSTEM_PROMPT = (
    "You are a plant identification expert. Analyze images and return plant "
    "information strictly in the exact JSON format requested."
)

IDENTIFY_PROMPT = """Identify the plant in the provided image.

Return ONLY valid JSON in this exact format, with no other text:
{
  "plantName": "common name",
  "scientificName": "scientific name",
  "plantType": "type (e.g. succulent, shrub, herb, tree)",
  "suitableEnvironment": "growing conditions: light, temperature, humidity, soil",
  "careInstructions": "care instructions: watering, feeding, pruning",
  "confidence": an integer between 0 and 100
}"""

DIAGNOSE_SYSTEM_PROMPT = (
    "You are a plant health AI that diagnoses diseases strictly in valid JSON format."
)

DIAGNOSE_PROMPT = """You are an expert plant pathologist. Analyze the provided plant image for ANY type of disease, pest damage, or health issues.

Return ONLY valid JSON in this exact format, with no other text:
{
  "diseaseName": "disease name or 'Healthy' if no issues detected",
  "plantName": "identified plant name (if known)",
  "severity": "Mild/Moderate/Severe/None",
  "symptoms": "detailed description of visible symptoms and signs",
  "treatment": "specific treatment steps and remedies",
  "prevention": "prevention tips and best practices",
  "confidence": an integer between 0 and 100
}

If the plant appears healthy, set:
"diseaseName": "Healthy"
"severity": "None"
"symptoms": "No visible signs of disease or stress"
"treatment": "No treatment required"
"prevention": "Continue proper care and regular monitoring"
"""

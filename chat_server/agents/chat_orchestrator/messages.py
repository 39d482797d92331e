# User-facing fixed texts (the assistant answers in Spanish)

APOLOGY_TEXT = "Lo siento, ocurrió un error procesando la solicitud."

EXTRACTION_WARNING = (
    "\n\n_Nota: no fue posible generar imágenes ni enlaces de mapa para esta respuesta "
    "(posiblemente por falta de configuración del servicio de extracción)._"
)

"""
Centralized configuration defaults for XML data extraction.

These are operational settings shared by the CLI, the configuration manager
and the schema loader. CLI arguments and environment variables override them
at runtime.
"""


class ExtractionDefaults:
    """
    Centralized operational configuration for extraction runs.

    All values are defaults that can be overridden:
    - xml_data_extractor schema.yml doc.xml --indent 4 --log-level DEBUG
    - XML_DATA_EXTRACTOR_LOG_LEVEL=INFO xml_data_extractor schema.yml doc.xml
    """

    # Schema document sections
    SCHEMA_SECTION = "schemas"
    MAPPERS_SECTION = "mappers"

    # Schema file formats accepted by ConfigManager.load_schema
    SCHEMA_FILE_SUFFIXES = (".yaml", ".yml", ".json")

    # Output
    JSON_INDENT = 2

    # Logging
    LOG_LEVEL = "WARNING"  # Default logging level (CRITICAL, ERROR, WARNING, INFO, DEBUG)
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def to_dict(cls) -> dict:
        """
        Export all defaults as a dictionary.

        Returns:
            Dictionary of all ExtractionDefaults class attributes.
        """
        return {
            key: getattr(cls, key)
            for key in dir(cls)
            if not key.startswith('_') and key.isupper()
        }

    @classmethod
    def log_summary(cls, logger):
        """
        Log a summary of all operational defaults.

        Args:
            logger: Logger instance to write the summary to
        """
        config_dict = cls.to_dict()
        summary = "\n".join([f"  {key}: {value}" for key, value in sorted(config_dict.items())])
        logger.info(f"Extraction Configuration Defaults:\n{summary}")

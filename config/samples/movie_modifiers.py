"""Custom modifiers used by movies_schema.yml."""


class MovieModifiers:

    def minutes_to_hours(self, value):
        hours, minutes = divmod(int(value), 60)
        return f"{hours}h {minutes}min"

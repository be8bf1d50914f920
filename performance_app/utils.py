from rest_framework import serializers

class LabelChoiceField(serializers.ChoiceField):
    def to_internal_value(self, data):
        data_str = str(data)
        if data_str in self.choices:
            return data_str
        for key, label in self.choices.items():
            if label == data:
                return key

        for key, label in self.choices.items():
            if str(label).lower() == data_str.lower():
                return key
        self.fail('invalid_choice', input=data)
    def to_representation(self, value):
        return self.choices.get(value, super().to_representation(value))


class ScoreField(serializers.Field):
    """
    Criterion score coming from a form: 1..5, or 0 / "" / null for "not rated".

    Numeric strings ("4") are turned into ints here so the scoring services
    only ever see Optional[int].
    """
    default_error_messages = {
        'invalid': 'Score must be a whole number between 1 and 5 (0 or empty = not rated).',
    }

    def __init__(self, **kwargs):
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data == "":
            return (True, None)
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail('invalid')
        if isinstance(data, str):
            data = data.strip()
            if not data.isdigit():
                self.fail('invalid')
            data = int(data)
        if isinstance(data, float):
            if not data.is_integer():
                self.fail('invalid')
            data = int(data)
        if not isinstance(data, int) or not 0 <= data <= 5:
            self.fail('invalid')
        return data or None

    def to_representation(self, value):
        return value

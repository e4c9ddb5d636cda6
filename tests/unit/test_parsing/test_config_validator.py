"""Unit tests for configuration validation."""

import pytest

from pypiecewise.core.exceptions import ConfigurationError
from pypiecewise.parsing.validation.config_validator import validate_config, validate_function_section


def make_config(**overrides):
    config = {
        'function': {'expression': '2*x'},
        'segments': 4,
        'interval': [0.0, 5.0],
    }
    config.update(overrides)
    return config


class TestValidateConfig:
    """Test cases for validate_config."""

    def test_minimal_config(self):
        validate_config(make_config())

    def test_full_config(self):
        validate_config(make_config(name='test', flat_segments='reject', slope_tolerance=1e-9,
                                    function={'expression': 'a*t', 'variable': 't', 'parameters': {'a': 2}}))

    def test_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            validate_config([1, 2, 3])

    def test_unknown_key_with_suggestion(self):
        config = make_config()
        config['segmnts'] = config.pop('segments')
        with pytest.raises(ConfigurationError, match=r"Did you mean 'segments'\?") as exc_info:
            validate_config(config)
        assert exc_info.value.key == 'segmnts'

    def test_missing_key(self):
        config = make_config()
        del config['interval']
        with pytest.raises(ConfigurationError, match="Missing required key.*interval") as exc_info:
            validate_config(config)
        assert exc_info.value.key == 'interval'

    @pytest.mark.parametrize("segments", [0, -3, 2.5, True, "10"])
    def test_invalid_segments(self, segments):
        with pytest.raises(ConfigurationError, match="'segments' must be an integer") as exc_info:
            validate_config(make_config(segments=segments))
        assert exc_info.value.key == 'segments'

    @pytest.mark.parametrize("interval", [[0.0], [0.0, 1.0, 2.0], "0..1", [0.0, float('inf')], [0.0, "1"]])
    def test_malformed_interval(self, interval):
        with pytest.raises(ConfigurationError, match="two finite numbers"):
            validate_config(make_config(interval=interval))

    def test_reversed_interval(self):
        with pytest.raises(ConfigurationError, match="lower bound must be less"):
            validate_config(make_config(interval=[5.0, 0.0]))

    def test_invalid_flat_segment_policy(self):
        with pytest.raises(ConfigurationError, match="'flat_segments' must be one of"):
            validate_config(make_config(flat_segments='ignore'))

    @pytest.mark.parametrize("tolerance", [-1e-9, float('nan'), "small"])
    def test_invalid_slope_tolerance(self, tolerance):
        with pytest.raises(ConfigurationError, match="slope_tolerance"):
            validate_config(make_config(slope_tolerance=tolerance))

    def test_invalid_name(self):
        with pytest.raises(ConfigurationError, match="'name' must be a string"):
            validate_config(make_config(name=42))


class TestValidateFunctionSection:
    """Test cases for validate_function_section."""

    def test_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match="'function' must be a mapping"):
            validate_function_section("2*x")

    def test_unknown_key_with_suggestion(self):
        with pytest.raises(ConfigurationError, match=r"Did you mean 'expression'\?"):
            validate_function_section({'expresion': '2*x'})

    @pytest.mark.parametrize("expression", ["", "   ", None, True])
    def test_invalid_expression(self, expression):
        with pytest.raises(ConfigurationError, match="non-empty expression"):
            validate_function_section({'expression': expression})

    def test_numeric_expression_is_allowed(self):
        validate_function_section({'expression': 3.5})

    def test_invalid_variable(self):
        with pytest.raises(ConfigurationError, match="valid identifier"):
            validate_function_section({'expression': '2*x', 'variable': '2x'})

    def test_parameter_shadows_variable(self):
        with pytest.raises(ConfigurationError, match="shadows"):
            validate_function_section({'expression': 'a*x', 'parameters': {'x': 1.0}})

    @pytest.mark.parametrize("parameters", [{'a': 'one'}, {'a': float('inf')}, {'a': True}])
    def test_invalid_parameter_value(self, parameters):
        with pytest.raises(ConfigurationError, match="finite number"):
            validate_function_section({'expression': 'a*x', 'parameters': parameters})

    def test_parameters_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match="mapping of names"):
            validate_function_section({'expression': 'a*x', 'parameters': [1.0]})

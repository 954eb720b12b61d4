"""Tests for ScalingModel persistence."""

import json
from pathlib import Path

import numpy as np
import pytest

from liq.preprocess import ScalingModel, ScalerType
from liq.preprocess.exceptions import SerializationError
from liq.preprocess.scalers import PcaWhitening
from liq.preprocess.state import FORMAT_VERSION, ScalingModelState

FITTABLE_TYPES = [t for t in ScalerType if t is not ScalerType.NONE]


@pytest.fixture
def pca_model(train_matrix: np.ndarray) -> ScalingModel:
    """PCA whitening model with epsilon=1e-5 fit on train_matrix."""
    return ScalingModel(epsilon=1e-5, scaler_type=ScalerType.PCA).fit(train_matrix)


class TestDictRoundTrip:
    """Tests for to_dict/from_dict."""

    def test_pca_round_trip(self, pca_model: ScalingModel, train_matrix: np.ndarray) -> None:
        """A restored PCA model reproduces the original transform."""
        restored = ScalingModel.from_dict(pca_model.to_dict())
        assert restored.scaler_type is ScalerType.PCA
        assert restored.epsilon == 1e-5
        assert isinstance(restored.scaler, PcaWhitening)
        np.testing.assert_allclose(
            restored.transform(train_matrix), pca_model.transform(train_matrix), rtol=1e-12, atol=1e-12
        )

    @pytest.mark.parametrize("scaler_type", FITTABLE_TYPES)
    def test_every_type(self, scaler_type: ScalerType, train_matrix: np.ndarray) -> None:
        """Each scaler type restores to the same kind and output."""
        model = ScalingModel(min_value=-1, max_value=3, scaler_type=scaler_type).fit(train_matrix)
        restored = ScalingModel.from_dict(model.to_dict())
        assert restored.fitted_kind is scaler_type
        assert (restored.min_value, restored.max_value) == (-1, 3)
        np.testing.assert_allclose(
            restored.inverse_transform(restored.transform(train_matrix)), train_matrix, atol=1e-10
        )

    def test_unfitted_model(self) -> None:
        """Unfitted models serialize without a scaler payload."""
        data = ScalingModel(max_value=4, scaler_type=ScalerType.MINMAX).to_dict()
        assert data["scaler"] is None
        assert data["scaler_type"] == "min_max_scaler"
        assert data["format_version"] == FORMAT_VERSION

        restored = ScalingModel.from_dict(data)
        assert restored.scaler_type is ScalerType.MINMAX
        assert restored.max_value == 4
        assert not restored.is_fitted

    def test_payload_is_json_compatible(self, pca_model: ScalingModel) -> None:
        """to_dict output survives json.dumps/json.loads."""
        data = json.loads(json.dumps(pca_model.to_dict()))
        assert data["scaler"]["kind"] == "pca_whitening"
        assert ScalingModel.from_dict(data).is_fitted

    def test_restored_model_is_independent(self, pca_model: ScalingModel, other_matrix: np.ndarray) -> None:
        """Refitting the original does not affect a restored model."""
        data = pca_model.to_dict()
        restored = ScalingModel.from_dict(data)
        expected = restored.transform(other_matrix)
        pca_model.fit(other_matrix)
        np.testing.assert_array_equal(restored.transform(other_matrix), expected)


class TestJsonRoundTrip:
    """Tests for to_json/from_json and save/load."""

    def test_json_round_trip(self, pca_model: ScalingModel, train_matrix: np.ndarray) -> None:
        """JSON text restores the same transform."""
        restored = ScalingModel.from_json(pca_model.to_json())
        np.testing.assert_allclose(
            restored.transform(train_matrix), pca_model.transform(train_matrix), rtol=1e-12, atol=1e-12
        )

    def test_save_load(self, tmp_path: Path, pca_model: ScalingModel, train_matrix: np.ndarray) -> None:
        """save/load round-trips through a file."""
        path = pca_model.save(tmp_path / "pca.json")
        assert path.exists()
        restored = ScalingModel.load(path)
        assert restored.scaler_type is ScalerType.PCA
        np.testing.assert_allclose(
            restored.transform(train_matrix), pca_model.transform(train_matrix), rtol=1e-12, atol=1e-12
        )

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise SerializationError with the path."""
        path = tmp_path / "missing.json"
        with pytest.raises(SerializationError) as exc_info:
            ScalingModel.load(path)
        assert exc_info.value.path == path

    def test_load_truncated_file(self, tmp_path: Path, pca_model: ScalingModel) -> None:
        """Truncated JSON is rejected."""
        path = tmp_path / "truncated.json"
        path.write_text(pca_model.to_json()[:50])
        with pytest.raises(SerializationError) as exc_info:
            ScalingModel.load(path)
        assert exc_info.value.path == path


class TestMalformedState:
    """Malformed or inconsistent payloads raise SerializationError."""

    def test_kind_mismatch(self, pca_model: ScalingModel) -> None:
        """A scaler payload of another kind than scaler_type is rejected."""
        data = pca_model.to_dict()
        data["scaler_type"] = "zca_whitening"
        with pytest.raises(SerializationError) as exc_info:
            ScalingModel.from_dict(data)
        assert "does not match" in str(exc_info.value)

    def test_payload_with_none_type(self, pca_model: ScalingModel) -> None:
        """A payload cannot claim scaler type none."""
        data = pca_model.to_dict()
        data["scaler_type"] = "none"
        data["scaler"]["kind"] = "none"
        with pytest.raises(SerializationError):
            ScalingModel.from_dict(data)

    def test_unknown_scaler_type(self, pca_model: ScalingModel) -> None:
        """Unknown scaler names are rejected."""
        data = pca_model.to_dict()
        data["scaler_type"] = "robust_scaler"
        with pytest.raises(SerializationError):
            ScalingModel.from_dict(data)

    def test_missing_scaler_params(self, pca_model: ScalingModel) -> None:
        """A scaler entry without params is rejected."""
        data = pca_model.to_dict()
        del data["scaler"]["params"]
        with pytest.raises(SerializationError):
            ScalingModel.from_dict(data)

    def test_truncated_arrays(self, pca_model: ScalingModel) -> None:
        """Arrays that do not match n_features are rejected."""
        data = pca_model.to_dict()
        data["scaler"]["params"]["arrays"]["eigenvectors_"] = [[1.0, 0.0, 0.0]]
        with pytest.raises(SerializationError):
            ScalingModel.from_dict(data)

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("eigenvectors_", [1.0, 2.0, 3.0]),
            ("eigenvalues_", [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]),
            ("mean_", [[0.0], [0.0], [0.0]]),
        ],
    )
    def test_arrays_with_wrong_ndim(self, pca_model: ScalingModel, name: str, value: list) -> None:
        """Arrays with the right length but the wrong dimensionality are rejected."""
        data = pca_model.to_dict()
        data["scaler"]["params"]["arrays"][name] = value
        with pytest.raises(SerializationError):
            ScalingModel.from_dict(data)

    @pytest.mark.parametrize("eigenvalues", [[-1.0, -1.0, -1.0], [1.0, 0.0, 1.0]])
    def test_non_positive_eigenvalues(self, pca_model: ScalingModel, eigenvalues: list[float]) -> None:
        """Whitening state must have strictly positive eigenvalues."""
        data = pca_model.to_dict()
        data["scaler"]["params"]["arrays"]["eigenvalues_"] = eigenvalues
        with pytest.raises(SerializationError) as exc_info:
            ScalingModel.from_dict(data)
        assert "eigenvalues_" in str(exc_info.value)

    @pytest.mark.parametrize(
        "scaler_type",
        [ScalerType.MAXABS, ScalerType.STANDARD, ScalerType.MEAN, ScalerType.MINMAX],
    )
    def test_zero_scale(self, scaler_type: ScalerType, train_matrix: np.ndarray) -> None:
        """Linear scaler state with a zero scale is rejected."""
        data = ScalingModel(scaler_type=scaler_type).fit(train_matrix).to_dict()
        data["scaler"]["params"]["arrays"]["scale_"] = [0.0, 0.0, 0.0]
        with pytest.raises(SerializationError) as exc_info:
            ScalingModel.from_dict(data)
        assert "scale_" in str(exc_info.value)

    def test_zero_features(self, pca_model: ScalingModel) -> None:
        """A scaler fit on no features is rejected."""
        data = pca_model.to_dict()
        data["scaler"]["params"]["n_features"] = 0
        for name in ("mean_", "eigenvalues_", "eigenvectors_"):
            data["scaler"]["params"]["arrays"][name] = []
        with pytest.raises(SerializationError):
            ScalingModel.from_dict(data)

    def test_scaler_config_disagrees_with_model(self, pca_model: ScalingModel) -> None:
        """The stored scaler epsilon must equal the model's epsilon."""
        data = pca_model.to_dict()
        data["epsilon"] = 0.5
        with pytest.raises(SerializationError) as exc_info:
            ScalingModel.from_dict(data)
        assert "epsilon" in str(exc_info.value)

    def test_minmax_bounds_disagree_with_model(self, train_matrix: np.ndarray) -> None:
        """The stored min-max bounds must equal the model's bounds."""
        model = ScalingModel(min_value=-1, max_value=1, scaler_type=ScalerType.MINMAX)
        data = model.fit(train_matrix).to_dict()
        data["min_value"] = 0
        with pytest.raises(SerializationError) as exc_info:
            ScalingModel.from_dict(data)
        assert "min_value" in str(exc_info.value)

    def test_config_changed_after_fit(self, pca_model: ScalingModel, train_matrix: np.ndarray) -> None:
        """A model whose configuration changed since fit cannot be saved until refit."""
        pca_model.epsilon = 0.5
        with pytest.raises(SerializationError):
            pca_model.to_dict()
        pca_model.fit(train_matrix)
        assert ScalingModel.from_dict(pca_model.to_dict()).epsilon == 0.5

    def test_negative_epsilon(self, pca_model: ScalingModel) -> None:
        """Stored epsilon must be non-negative."""
        data = pca_model.to_dict()
        data["epsilon"] = -1.0
        with pytest.raises(SerializationError):
            ScalingModel.from_dict(data)

    def test_unsupported_version(self, pca_model: ScalingModel) -> None:
        """Unknown format versions are rejected."""
        data = pca_model.to_dict()
        data["format_version"] = FORMAT_VERSION + 1
        with pytest.raises(SerializationError):
            ScalingModel.from_dict(data)

    def test_not_json(self) -> None:
        """Non-JSON text is rejected."""
        with pytest.raises(SerializationError):
            ScalingModel.from_json("not json")

    def test_unpersistable_configuration(self) -> None:
        """Negative epsilon cannot be written."""
        with pytest.raises(SerializationError):
            ScalingModel(epsilon=-1.0).to_dict()


def test_state_model_defaults() -> None:
    """An empty state describes an empty model."""
    state = ScalingModelState()
    model = ScalingModel.from_state(state)
    assert model.scaler_type is ScalerType.NONE
    assert model.scaler is None

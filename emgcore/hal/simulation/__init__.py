"""EMG simulation: muscle model, noise, artifacts, profiles and sample generation."""
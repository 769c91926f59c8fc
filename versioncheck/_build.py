# Generated by scripts/stamp_build.py. Do not edit by hand.
BUILD_SEQUENCE = 1
BUILD_LABEL = '0.1.0'

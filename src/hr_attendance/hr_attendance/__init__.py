"""HR attendance package.

Feature modules (attendance, late_policy, leave, employees, settings) with a thin Flask
controller layer over service/repository layers. The attendance classifier and the
late-policy accumulator are pure services; persistence sits behind repository protocols.
"""

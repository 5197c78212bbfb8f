"""Domain constants for weight goals and user registration."""

# Weight goal bounds
MIN_WEIGHT = 30
MAX_WEIGHT = 300
MIN_WEEKS = 4
MAX_WEEKS = 104
MIN_WEEKLY_LOSS = 0.25  # kg/week
MIN_GOAL_AGE = 18

# Energy
KCAL_PER_KG = 7700
MIN_DAILY_DEFICIT = 200
MAX_DAILY_DEFICIT = 1000

# Review
FIRST_REVIEW_DAYS = 7
WEEKS_WITHOUT_PROGRESS = 3
MAX_ACCELERATION = 1.5

# Request list limits
MAX_CUSTOM_MILESTONES = 10
MAX_PERSONALIZED_ALERTS = 20

# Secondary goal measurement ranges (cm, times/week, liters/day)
WAIST_RANGE = (50, 200)
HIP_RANGE = (60, 250)
ARM_RANGE = (15, 60)
EXERCISE_FREQUENCY_RANGE = (1, 7)
WATER_INTAKE_RANGE = (1, 5)

TIME_OF_DAY_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"

# User registration
MIN_USER_AGE = 16
MAX_USER_AGE = 100
ADULT_AGE = 18
NAME_MIN_WORDS = 2
NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 8
PASSWORD_PATTERN = r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$"
PHONE_PATTERN = r"^\(?\d{2}\)?\s?\d{4,5}-?\d{4}$"
CPF_PATTERN = r"^\d{3}\.\d{3}\.\d{3}-\d{2}$"
TERMS_VERSION = "v1.0"

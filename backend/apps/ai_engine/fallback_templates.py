"""
Canned components returned when the model can't be reached.

Templates are matched by keywords in the prompt, in declaration order; the
last one is the catch-all.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FallbackTemplate:
    name: str
    description: str
    keywords: Tuple[str, ...]
    typed_code: str
    untyped_code: str

    def matches(self, prompt_lower: str) -> bool:
        return any(keyword in prompt_lower for keyword in self.keywords)

    def code_for(self, typescript: bool) -> str:
        return (self.typed_code if typescript else self.untyped_code).strip()


GRADIENT_BUTTON = FallbackTemplate(
    name="GradientButton",
    description="A button with a gradient background that grows on hover",
    keywords=("button", "buton"),
    typed_code="""
import React from 'react';

interface GradientButtonProps {
  label: string;
  onClick?: () => void;
  variant?: 'primary' | 'secondary';
}

const GradientButton: React.FC<GradientButtonProps> = ({
  label,
  onClick,
  variant = 'primary'
}) => {
  return (
    <button
      className={`
        px-6 py-3 rounded-full font-medium transition-all duration-300
        transform hover:scale-105 hover:shadow-lg
        ${variant === 'primary'
          ? 'bg-gradient-to-r from-blue-600 to-violet-600 text-white'
          : 'bg-white text-gray-800 border border-gray-200'}
      `}
      onClick={onClick}
    >
      {label}
    </button>
  );
};

export default GradientButton;
""",
    untyped_code="""
import React from 'react';

const GradientButton = ({ label, onClick, variant = 'primary' }) => {
  return (
    <button
      className={`
        px-6 py-3 rounded-full font-medium transition-all duration-300
        transform hover:scale-105 hover:shadow-lg
        ${variant === 'primary'
          ? 'bg-gradient-to-r from-blue-600 to-violet-600 text-white'
          : 'bg-white text-gray-800 border border-gray-200'}
      `}
      onClick={onClick}
    >
      {label}
    </button>
  );
};

export default GradientButton;
""",
)

FEATURE_CARD = FallbackTemplate(
    name="FeatureCard",
    description="A feature card with an icon, a title and a description",
    keywords=("card", "kart"),
    typed_code="""
import React from 'react';

interface FeatureCardProps {
  icon: React.ReactNode;
  title: string;
  description: string;
}

const FeatureCard: React.FC<FeatureCardProps> = ({
  icon,
  title,
  description
}) => {
  return (
    <div className="bg-white dark:bg-gray-800 p-6 rounded-xl shadow-md hover:shadow-lg transition-shadow duration-300">
      <div className="w-12 h-12 bg-blue-100 dark:bg-blue-900 rounded-full flex items-center justify-center text-blue-600 dark:text-blue-400 mb-4">
        {icon}
      </div>
      <h3 className="text-xl font-semibold mb-2 text-gray-900 dark:text-white">{title}</h3>
      <p className="text-gray-600 dark:text-gray-300">{description}</p>
    </div>
  );
};

export default FeatureCard;
""",
    untyped_code="""
import React from 'react';

const FeatureCard = ({ icon, title, description }) => {
  return (
    <div className="bg-white dark:bg-gray-800 p-6 rounded-xl shadow-md hover:shadow-lg transition-shadow duration-300">
      <div className="w-12 h-12 bg-blue-100 dark:bg-blue-900 rounded-full flex items-center justify-center text-blue-600 dark:text-blue-400 mb-4">
        {icon}
      </div>
      <h3 className="text-xl font-semibold mb-2 text-gray-900 dark:text-white">{title}</h3>
      <p className="text-gray-600 dark:text-gray-300">{description}</p>
    </div>
  );
};

export default FeatureCard;
""",
)

_FORM_INPUT_BODY = """
  return (
    <div className="mb-4">
      <label
        htmlFor={id}
        className="block text-sm font-medium text-gray-700 dark:text-gray-300 mb-1"
      >
        {label}
      </label>
      <input
        id={id}
        type={type}
        value={value}
        onChange={onChange}
        placeholder={placeholder}
        className={`w-full px-3 py-2 border ${
          error
            ? 'border-red-500 focus:ring-red-500 focus:border-red-500'
            : 'border-gray-300 dark:border-gray-600 focus:ring-blue-500 focus:border-blue-500'
        } rounded-md shadow-sm focus:outline-none focus:ring-2 dark:bg-gray-700 dark:text-white`}
      />
      {error && (
        <p className="mt-1 text-sm text-red-600 dark:text-red-400">{error}</p>
      )}
    </div>
  );
};

export default FormInput;
"""

FORM_INPUT = FallbackTemplate(
    name="FormInput",
    description="A form input with a label and an error message",
    keywords=("input", "form"),
    typed_code="""
import React from 'react';

interface FormInputProps {
  label: string;
  id: string;
  type?: string;
  value: string;
  onChange: (e: React.ChangeEvent<HTMLInputElement>) => void;
  error?: string;
  placeholder?: string;
}

const FormInput: React.FC<FormInputProps> = ({
  label,
  id,
  type = 'text',
  value,
  onChange,
  error,
  placeholder
}) => {""" + _FORM_INPUT_BODY,
    untyped_code="""
import React from 'react';

const FormInput = ({
  label,
  id,
  type = 'text',
  value,
  onChange,
  error,
  placeholder
}) => {""" + _FORM_INPUT_BODY,
)

_ANIMATED_BODY = """
  const [isExpanded, setIsExpanded] = useState(false);

  return (
    <div
      className="bg-white dark:bg-gray-800 rounded-lg overflow-hidden shadow-md hover:shadow-lg transition-all duration-300"
    >
      <div className="p-6">
        <h3 className="text-xl font-semibold mb-2 text-gray-900 dark:text-white">{title}</h3>
        <div
          className={`overflow-hidden transition-all duration-300 ${
            isExpanded ? 'max-h-96' : 'max-h-20'
          }`}
        >
          <p className="text-gray-600 dark:text-gray-300">{content}</p>
        </div>
        <button
          onClick={() => setIsExpanded(!isExpanded)}
          className="mt-4 text-blue-600 dark:text-blue-400 font-medium"
        >
          {isExpanded ? 'Show Less' : 'Show More'}
        </button>
      </div>
    </div>
  );
};

export default AnimatedComponent;
"""

ANIMATED_COMPONENT = FallbackTemplate(
    name="AnimatedComponent",
    description="A component built from the user's request",
    keywords=(),
    typed_code="""
import React, { useState } from 'react';

interface AnimatedComponentProps {
  title: string;
  content: string;
}

const AnimatedComponent: React.FC<AnimatedComponentProps> = ({
  title,
  content
}) => {""" + _ANIMATED_BODY,
    untyped_code="""
import React, { useState } from 'react';

const AnimatedComponent = ({ title, content }) => {""" + _ANIMATED_BODY,
)

KEYWORD_TEMPLATES = (GRADIENT_BUTTON, FEATURE_CARD, FORM_INPUT)
DEFAULT_TEMPLATE = ANIMATED_COMPONENT


def select_template(prompt: str) -> FallbackTemplate:
    prompt_lower = (prompt or '').lower()
    for template in KEYWORD_TEMPLATES:
        if template.matches(prompt_lower):
            return template
    return DEFAULT_TEMPLATE
